"""Ports for the external analysis engine and the store files it owns."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from dialyze.domain.model import (
        AnalysisStore,
        ArtifactPath,
        ComponentName,
        Diagnostic,
    )


@runtime_checkable
class AnalysisEngine(Protocol):
    """Fixed verb set of the success-typing engine.

    Every verb blocks until the engine finishes and raises ``EngineError`` on failure.
    """

    def build(self, store: AnalysisStore, components: Sequence[ComponentName]) -> None: ...

    def add(self, store: AnalysisStore, artifacts: Collection[ArtifactPath]) -> None: ...

    def remove(self, store: AnalysisStore, artifacts: Collection[ArtifactPath]) -> None: ...

    def verify(self, store: AnalysisStore, artifacts: Collection[ArtifactPath]) -> None: ...

    def list_artifacts(self, store: AnalysisStore) -> frozenset[ArtifactPath] | None:
        """Return the artifacts recorded in ``store`` or ``None`` when it does not exist."""
        ...

    def analyse(
        self,
        stores: Sequence[AnalysisStore],
        artifacts: Collection[ArtifactPath],
        warnings: Sequence[str],
    ) -> Sequence[Diagnostic]: ...


@runtime_checkable
class StoreFiles(Protocol):
    """Byte-level access to store files, used only for bootstrap copies."""

    def copy(self, source: AnalysisStore, target: AnalysisStore) -> None: ...


__all__ = ["AnalysisEngine", "StoreFiles"]
