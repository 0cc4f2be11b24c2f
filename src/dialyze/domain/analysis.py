"""Collision check and whole-program analysis of the project's own modules."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from dialyze.domain.errors import ModuleCollisionError
from dialyze.domain.model import module_names
from dialyze.domain.resolution import locate_artifacts

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from dialyze.domain.model import Diagnostic, ModuleName, ReconciledStores
    from dialyze.domain.ports import AnalysisEngine, ArtifactFinder

log = getLogger(__name__)


def analyse_project(
    modules: Iterable[ModuleName],
    stores: ReconciledStores,
    *,
    engine: AnalysisEngine,
    finder: ArtifactFinder,
    warnings: Sequence[str] = (),
) -> list[Diagnostic]:
    """Analyse the project's modules against the reconciled stores.

    A module cannot be both under analysis and background knowledge, so any
    name shared with a stored artifact raises ``ModuleCollisionError`` before
    the engine is invoked.
    """

    log.info("Finding modules for analysis")
    artifacts = locate_artifacts(modules, frozenset(), finder=finder)
    clashes = module_names(artifacts) & module_names(stores.artifacts)
    if clashes:
        raise ModuleCollisionError(clashes)
    if not artifacts:
        return []

    analysis_stores = stores.analysis_stores
    log.info(
        "Analysing %s modules with %s",
        len(artifacts),
        ", ".join(store.name for store in analysis_stores),
    )
    return list(engine.analyse(analysis_stores, artifacts, warnings))
