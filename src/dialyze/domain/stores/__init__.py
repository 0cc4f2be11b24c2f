"""Analysis store layering and reconciliation."""

from __future__ import annotations

from .layers import (
    BASE_RUNTIME_COMPONENTS,
    LANGUAGE_RUNTIME_COMPONENTS,
    PlannedLayer,
    StoreLayerPlanner,
    StoreNames,
    plan_layers,
    store_layers,
)
from .reconcile import DEFAULT_BOOTSTRAP_COMPONENTS, ReconcilePlan, StoreReconciler

__all__ = [
    "BASE_RUNTIME_COMPONENTS",
    "DEFAULT_BOOTSTRAP_COMPONENTS",
    "LANGUAGE_RUNTIME_COMPONENTS",
    "PlannedLayer",
    "ReconcilePlan",
    "StoreLayerPlanner",
    "StoreNames",
    "plan_layers",
    "store_layers",
]
