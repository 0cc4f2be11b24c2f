"""Domain port definitions for adapters."""

from __future__ import annotations

from .discovery import ArtifactFinder, Compiler, ManifestReader
from .engine import AnalysisEngine, StoreFiles

__all__ = [
    "AnalysisEngine",
    "ArtifactFinder",
    "Compiler",
    "ManifestReader",
    "StoreFiles",
]
