"""Component closure and artifact resolution."""

from __future__ import annotations

from .closure import new_modules, resolve_components
from .locate import locate_artifacts

__all__ = ["locate_artifacts", "new_modules", "resolve_components"]
