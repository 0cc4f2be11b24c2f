"""Components, modules and compiled artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

ComponentName: TypeAlias = str
ModuleName: TypeAlias = str
ArtifactPath: TypeAlias = Path

ResolutionCache: TypeAlias = "Mapping[ComponentName, Component]"
"""Components resolved during one invocation, keyed by name."""


@dataclass(frozen=True, slots=True)
class Component:
    """Declared modules and dependencies of one component manifest."""

    name: ComponentName
    modules: frozenset[ModuleName] = field(default_factory=frozenset[str])
    dependencies: frozenset[ComponentName] = field(default_factory=frozenset[str])


def normalize_artifact_path(path: str | Path) -> ArtifactPath:
    """Return the absolute, normalized form used to compare artifacts."""

    return Path(path).expanduser().resolve()


def module_name(artifact: ArtifactPath) -> ModuleName:
    return artifact.stem


def module_names(artifacts: Iterable[ArtifactPath]) -> frozenset[ModuleName]:
    return frozenset(module_name(artifact) for artifact in artifacts)
