"""Domain model (pure, dependency-light)."""

from __future__ import annotations

from .component import (
    ArtifactPath,
    Component,
    ComponentName,
    ModuleName,
    ResolutionCache,
    module_name,
    module_names,
    normalize_artifact_path,
)
from .diagnostics import Diagnostic
from .store import AnalysisStore, ReconciledStores, StoreLayer

__all__ = [
    "AnalysisStore",
    "ArtifactPath",
    "Component",
    "ComponentName",
    "Diagnostic",
    "ModuleName",
    "ReconciledStores",
    "ResolutionCache",
    "StoreLayer",
    "module_name",
    "module_names",
    "normalize_artifact_path",
]
