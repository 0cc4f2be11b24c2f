"""Ports for discovering components and their compiled artifacts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from dialyze.domain.model import Component, ComponentName, ModuleName


@runtime_checkable
class ManifestReader(Protocol):
    """Read a component's manifest; missing or malformed manifests raise ``ManifestError``."""

    def read(self, name: ComponentName) -> Component: ...


@runtime_checkable
class ArtifactFinder(Protocol):
    """Search-path lookup of a module's compiled artifact."""

    def find(self, module: ModuleName) -> Path | None: ...


@runtime_checkable
class Compiler(Protocol):
    def __call__(self) -> None: ...


__all__ = ["ArtifactFinder", "Compiler", "ManifestReader"]
