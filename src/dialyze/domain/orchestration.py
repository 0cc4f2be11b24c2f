"""Application service running compile, store reconciliation and analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, TypeAlias

from dialyze.domain.analysis import analyse_project

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from dialyze.domain.model import (
        ArtifactPath,
        ComponentName,
        Diagnostic,
        ModuleName,
        ReconciledStores,
        StoreLayer,
    )
    from dialyze.domain.ports import AnalysisEngine, ArtifactFinder, Compiler, ManifestReader
    from dialyze.domain.stores import StoreLayerPlanner

log = getLogger(__name__)

LayerFactory: TypeAlias = "Callable[[Iterable[ComponentName]], Sequence[StoreLayer]]"


@dataclass(frozen=True, slots=True)
class DialyzeRequest:
    """What to run for one invocation."""

    project: tuple[ComponentName, ...]
    compile: bool = True
    check: bool = True
    analyse: bool = True
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ProjectInfo:
    """Modules under analysis and the components they depend on."""

    modules: frozenset[ModuleName]
    dependencies: tuple[ComponentName, ...]


@dataclass(slots=True)
class DialyzeResult:
    """Outcome of a dialyze run."""

    stores: ReconciledStores
    diagnostics: list[Diagnostic] = field(default_factory=list["Diagnostic"])

    @property
    def succeeded(self) -> bool:
        return not self.diagnostics

    @property
    def stored_artifacts(self) -> frozenset[ArtifactPath]:
        return self.stores.artifacts


@dataclass(slots=True)
class DialyzePorts:
    """Adapters a run needs, bundled for wiring."""

    reader: ManifestReader
    finder: ArtifactFinder
    engine: AnalysisEngine
    planner: StoreLayerPlanner
    layers: LayerFactory
    compiler: Compiler | None = None


def project_info(
    project: Sequence[ComponentName],
    *,
    reader: ManifestReader,
) -> ProjectInfo:
    """Read the project's own manifests; their dependencies exclude the project itself."""

    components = [reader.read(name) for name in dict.fromkeys(project)]
    modules = frozenset(module for component in components for module in component.modules)
    dependencies = dict.fromkeys(
        dependency
        for component in components
        for dependency in sorted(component.dependencies)
        if dependency not in project
    )
    return ProjectInfo(modules=modules, dependencies=tuple(dependencies))


def run_dialyze(request: DialyzeRequest, *, ports: DialyzePorts) -> DialyzeResult:
    """Run one invocation: compile, bring stores up to date, then analyse."""

    if request.compile:
        if ports.compiler is None:
            raise ValueError("Compilation requested but no compiler is configured")
        ports.compiler()

    log.info("Finding applications for analysis")
    info = project_info(request.project, reader=ports.reader)
    layers = ports.layers(info.dependencies)

    if request.check:
        stores = ports.planner.reconcile(layers)
    else:
        stores = ports.planner.open_existing(layers)

    if not request.analyse:
        return DialyzeResult(stores=stores)

    diagnostics = analyse_project(
        info.modules,
        stores,
        engine=ports.engine,
        finder=ports.finder,
        warnings=request.warnings,
    )
    return DialyzeResult(stores=stores, diagnostics=diagnostics)
