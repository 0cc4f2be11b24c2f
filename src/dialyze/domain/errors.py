"""Errors that abort a dialyze run."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class DialyzeError(RuntimeError):
    """Base class for fatal errors."""


class ManifestError(DialyzeError):
    """Raised when a component manifest is missing or cannot be parsed."""


class StoreError(DialyzeError):
    """Raised when an analysis store cannot be opened."""


class EngineError(DialyzeError):
    """Raised when the analysis engine fails to run a command."""

    def __init__(self, message: str, *, output: str | None = None) -> None:
        super().__init__(message if not output else f"{message}: {output}")
        self.output = output


class CompileError(DialyzeError):
    """Raised when the project fails to compile."""


class ModuleCollisionError(DialyzeError):
    """Raised when project modules are also part of a background store."""

    def __init__(self, clashes: Iterable[str]) -> None:
        self.clashes = tuple(sorted(clashes))
        super().__init__(f"Clashes with PLT: {', '.join(self.clashes)}")
