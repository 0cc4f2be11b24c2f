"""Bring one analysis store's recorded artifacts in line with a desired set."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from dialyze.domain.errors import StoreError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dialyze.domain.model import AnalysisStore, ArtifactPath, ComponentName
    from dialyze.domain.ports import AnalysisEngine, StoreFiles

log = getLogger(__name__)

DEFAULT_BOOTSTRAP_COMPONENTS: tuple[ComponentName, ...] = ("erts",)


@dataclass(frozen=True, slots=True)
class ReconcilePlan:
    """Partition of ``old`` and ``desired`` into the three engine operations."""

    remove: frozenset[ArtifactPath] = field(default_factory=frozenset["ArtifactPath"])
    keep: frozenset[ArtifactPath] = field(default_factory=frozenset["ArtifactPath"])
    add: frozenset[ArtifactPath] = field(default_factory=frozenset["ArtifactPath"])

    @classmethod
    def between(
        cls,
        old: frozenset[ArtifactPath],
        desired: frozenset[ArtifactPath],
    ) -> ReconcilePlan:
        return cls(remove=old - desired, keep=old & desired, add=desired - old)

    @property
    def desired(self) -> frozenset[ArtifactPath]:
        return self.keep | self.add


@dataclass(slots=True)
class StoreReconciler:
    """Issue the minimal remove/verify/add sequence against one store."""

    engine: AnalysisEngine
    files: StoreFiles
    bootstrap_components: Sequence[ComponentName] = DEFAULT_BOOTSTRAP_COMPONENTS

    def reconcile(
        self,
        store: AnalysisStore,
        desired: frozenset[ArtifactPath],
        *,
        recorded: frozenset[ArtifactPath] | None,
        previous: AnalysisStore | None = None,
    ) -> frozenset[ArtifactPath]:
        """Update ``store`` to hold exactly ``desired`` and return it.

        ``recorded`` is the store's current listing, ``None`` when the store does
        not exist yet; it is then created from ``previous`` or built fresh.
        """

        old = recorded if recorded is not None else self._bootstrap(store, previous)
        plan = ReconcilePlan.between(old, desired)
        # remove before verify/add so the store never holds more than needed
        if plan.remove:
            log.info("Removing %s modules from %s", len(plan.remove), store.name)
            self.engine.remove(store, plan.remove)
        if plan.keep:
            log.info("Checking %s modules in %s", len(plan.keep), store.name)
            self.engine.verify(store, plan.keep)
        if plan.add:
            log.info("Adding %s modules to %s", len(plan.add), store.name)
            self.engine.add(store, plan.add)
        return plan.desired

    def _bootstrap(
        self,
        store: AnalysisStore,
        previous: AnalysisStore | None,
    ) -> frozenset[ArtifactPath]:
        if previous is None:
            log.info("Creating %s", store.name)
            self.engine.build(store, self.bootstrap_components)
        else:
            log.info("Copying %s to %s", previous.name, store.name)
            self.files.copy(previous, store)
        recorded = self.engine.list_artifacts(store)
        if recorded is None:
            raise StoreError(f"Could not open {store}: no such file")
        return recorded
