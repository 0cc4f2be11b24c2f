"""Transitive closure of component dependencies.

Resolution is breadth-first: every still-unknown name of the current level is
read in one batch, the union of their dependencies forms the next level, and
the loop stops once a level introduces no name that is not already cached.
Each component is therefore read at most once per invocation.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dialyze.domain.model import Component, ComponentName, ModuleName, ResolutionCache
    from dialyze.domain.ports import ManifestReader

log = getLogger(__name__)


def resolve_components(
    roots: Iterable[ComponentName],
    cache: ResolutionCache,
    *,
    reader: ManifestReader,
) -> dict[ComponentName, Component]:
    """Return ``cache`` extended with the transitive closure of ``roots``.

    ``cache`` itself is left untouched; entries it already holds are never
    re-read. A missing manifest propagates ``ManifestError`` from the reader.
    """

    resolved: dict[ComponentName, Component] = dict(cache)
    pending = _unresolved(roots, resolved)
    while pending:
        log.debug("Reading %s component manifests", len(pending))
        batch = [reader.read(name) for name in pending]
        for component in batch:
            resolved[component.name] = component
        pending = _unresolved(
            (dependency for component in batch for dependency in component.dependencies),
            resolved,
        )
    return resolved


def new_modules(cache: ResolutionCache, previous: ResolutionCache) -> frozenset[ModuleName]:
    """Modules of the components in ``cache`` that ``previous`` did not know about."""

    return frozenset(
        module
        for name, component in cache.items()
        if name not in previous
        for module in component.modules
    )


def _unresolved(
    names: Iterable[ComponentName],
    resolved: ResolutionCache,
) -> list[ComponentName]:
    # dict.fromkeys keeps first-seen order so reads happen deterministically
    return [name for name in dict.fromkeys(names) if name not in resolved]
