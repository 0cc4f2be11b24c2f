"""Layered analysis stores, from project dependencies down to the base runtime.

Layers are listed outer-to-inner. Inner layers change least often (they depend
only on the installed runtime versions) and are shared between projects, so a
missing outer store is bootstrapped from a copy of the store beneath it
instead of being rebuilt from nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from dialyze.domain.errors import StoreError
from dialyze.domain.model import AnalysisStore, ReconciledStores, StoreLayer
from dialyze.domain.resolution import locate_artifacts, new_modules, resolve_components

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from dialyze.domain.model import ArtifactPath, Component, ComponentName
    from dialyze.domain.ports import AnalysisEngine, ArtifactFinder, ManifestReader

    from .reconcile import StoreReconciler

log = getLogger(__name__)

STORE_PREFIX = "dialyze_"
STORE_SUFFIX = ".plt"

BASE_RUNTIME_COMPONENTS: tuple[ComponentName, ...] = ("erts", "kernel", "stdlib", "crypto")
LANGUAGE_RUNTIME_COMPONENTS: tuple[ComponentName, ...] = ("elixir",)


@dataclass(frozen=True, slots=True)
class StoreNames:
    """Version-qualified store names; incompatible environments never share a file."""

    otp_version: str
    elixir_version: str
    build_env: str

    @property
    def base_runtime(self) -> str:
        return _store_file(f"erlang-{self.otp_version}")

    @property
    def language_runtime(self) -> str:
        return _store_file(f"erlang-{self.otp_version}_elixir-{self.elixir_version}")

    @property
    def dependencies(self) -> str:
        return _store_file(
            f"erlang-{self.otp_version}_elixir-{self.elixir_version}_deps-{self.build_env}"
        )


def _store_file(name: str) -> str:
    return f"{STORE_PREFIX}{name}{STORE_SUFFIX}"


def store_layers(
    dependencies: Iterable[ComponentName],
    *,
    names: StoreNames,
    global_dir: Path,
    local_dir: Path,
) -> tuple[StoreLayer, ...]:
    """Return the outer-to-inner layers for a project with ``dependencies``."""

    return (
        StoreLayer(
            store=AnalysisStore(local_dir / names.dependencies),
            components=tuple(dict.fromkeys(dependencies)),
        ),
        StoreLayer(
            store=AnalysisStore(global_dir / names.language_runtime),
            components=LANGUAGE_RUNTIME_COMPONENTS,
        ),
        StoreLayer(
            store=AnalysisStore(global_dir / names.base_runtime),
            components=BASE_RUNTIME_COMPONENTS,
        ),
    )


@dataclass(frozen=True, slots=True)
class PlannedLayer:
    """A layer to reconcile together with the store's current listing."""

    store: AnalysisStore
    components: tuple[ComponentName, ...]
    recorded: frozenset[ArtifactPath] | None


def plan_layers(
    layers: Sequence[StoreLayer],
    *,
    engine: AnalysisEngine,
) -> list[PlannedLayer]:
    """Select the layers to reconcile, returned inner-to-outer.

    Stores are probed outer-to-inner. Absent stores are queued; the first store
    that exists takes over the components of every layer beneath it, which then
    need no store of their own for this run.
    """

    log.info("Finding suitable PLTs")
    planned: list[PlannedLayer] = []
    for index, layer in enumerate(layers):
        log.info("Looking up modules in %s", layer.store.name)
        recorded = engine.list_artifacts(layer.store)
        if recorded is None:
            planned.append(PlannedLayer(layer.store, layer.components, None))
            continue
        inner = (name for deeper in layers[index + 1 :] for name in deeper.components)
        components = tuple(dict.fromkeys((*layer.components, *inner)))
        planned.append(PlannedLayer(layer.store, components, recorded))
        break
    planned.reverse()
    return planned


@dataclass(frozen=True, slots=True)
class _LayerState:
    store: AnalysisStore | None = None
    artifacts: frozenset[ArtifactPath] = field(default_factory=frozenset["ArtifactPath"])
    cache: dict[ComponentName, Component] = field(
        default_factory=dict["ComponentName", "Component"],
    )


@dataclass(slots=True)
class StoreLayerPlanner:
    """Drive closure, location and reconciliation layer by layer."""

    engine: AnalysisEngine
    reader: ManifestReader
    finder: ArtifactFinder
    reconciler: StoreReconciler

    def reconcile(self, layers: Sequence[StoreLayer]) -> ReconciledStores:
        """Reconcile every store in ``layers`` and return the up-to-date set."""

        if not layers:
            raise ValueError("At least one store layer is required")

        state = _LayerState()
        reconciled: list[AnalysisStore] = []
        for layer in plan_layers(layers, engine=self.engine):
            state = self._reconcile_layer(layer, state)
            reconciled.append(layer.store)
        return ReconciledStores(stores=tuple(reconciled), artifacts=state.artifacts)

    def open_existing(self, layers: Sequence[StoreLayer]) -> ReconciledStores:
        """Use the outermost store as it is, without checking it."""

        if not layers:
            raise ValueError("At least one store layer is required")

        store = layers[0].store
        log.info("Looking up modules in %s", store.name)
        recorded = self.engine.list_artifacts(store)
        if recorded is None:
            raise StoreError(f"Could not open {store}: no such file")
        return ReconciledStores(stores=(store,), artifacts=recorded)

    def _reconcile_layer(self, layer: PlannedLayer, state: _LayerState) -> _LayerState:
        log.info("Finding applications for %s", layer.store.name)
        cache = resolve_components(layer.components, state.cache, reader=self.reader)
        modules = new_modules(cache, state.cache)
        log.info("Finding modules for %s", layer.store.name)
        introduced = locate_artifacts(modules, state.artifacts, finder=self.finder)
        # a store copied from the layer beneath keeps that layer's artifacts
        desired = state.artifacts | introduced
        artifacts = self.reconciler.reconcile(
            layer.store,
            desired,
            recorded=layer.recorded,
            previous=state.store,
        )
        return _LayerState(store=layer.store, artifacts=artifacts, cache=cache)
