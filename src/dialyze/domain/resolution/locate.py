"""Mapping of module names to compiled artifact paths."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from dialyze.domain.model import normalize_artifact_path

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dialyze.domain.model import ArtifactPath, ModuleName
    from dialyze.domain.ports import ArtifactFinder

log = getLogger(__name__)


def locate_artifacts(
    modules: Iterable[ModuleName],
    prior: frozenset[ArtifactPath],
    *,
    finder: ArtifactFinder,
) -> frozenset[ArtifactPath]:
    """Return the artifacts of ``modules`` that are not already in ``prior``.

    Modules missing from the search path are reported and skipped.
    """

    located: set[ArtifactPath] = set()
    for module in sorted(set(modules)):
        path = finder.find(module)
        if path is None:
            log.error("Unknown module %s", module)
            continue
        artifact = normalize_artifact_path(path)
        if artifact not in prior:
            located.add(artifact)
    return frozenset(located)
