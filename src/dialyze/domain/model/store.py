"""Analysis stores and their layering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from .component import ArtifactPath, ComponentName


@dataclass(frozen=True, slots=True)
class AnalysisStore:
    """Identity of one persisted analysis store file."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True, slots=True)
class StoreLayer:
    """One store plus the components whose artifacts belong in it."""

    store: AnalysisStore
    components: tuple[ComponentName, ...]


@dataclass(frozen=True, slots=True)
class ReconciledStores:
    """Stores brought up to date, with every artifact they now hold."""

    stores: tuple[AnalysisStore, ...]
    artifacts: frozenset[ArtifactPath] = field(default_factory=frozenset["ArtifactPath"])

    @property
    def outermost(self) -> AnalysisStore:
        return self.stores[-1]

    @property
    def analysis_stores(self) -> tuple[AnalysisStore, ...]:
        # Each store is a copy-forward superset of the ones below it, so the
        # outermost store alone carries all background knowledge.
        return (self.outermost,)
