from __future__ import annotations

import pytest

from dialyze.domain.errors import StoreError
from dialyze.domain.stores import ReconcilePlan, StoreReconciler
from tests.helpers.fakes import FakeEngine, FakeStoreFiles, artifact, store

A, B, C, D = (artifact(name) for name in ("a", "b", "c", "d"))


def _reconciler(engine: FakeEngine) -> StoreReconciler:
    return StoreReconciler(engine=engine, files=FakeStoreFiles(engine))


@pytest.mark.parametrize(
    ("old", "desired"),
    [
        (frozenset(), frozenset()),
        (frozenset(), frozenset({A, B})),
        (frozenset({A, B}), frozenset()),
        (frozenset({A, B}), frozenset({B, C})),
        (frozenset({A, B, C}), frozenset({A, B, C})),
        (frozenset({A, D}), frozenset({B, C})),
    ],
)
def test_plan_partitions_old_and_desired(
    old: frozenset,
    desired: frozenset,
) -> None:
    plan = ReconcilePlan.between(old, desired)

    assert not plan.remove & plan.keep
    assert not plan.remove & plan.add
    assert not plan.keep & plan.add
    assert plan.keep | plan.add == desired
    assert plan.keep | plan.remove == old
    assert plan.desired == desired


def test_reconcile_issues_remove_verify_add_in_order() -> None:
    engine = FakeEngine()
    target = store("deps")
    engine.seed(target, {A, B})

    result = _reconciler(engine).reconcile(
        target,
        frozenset({B, C}),
        recorded=frozenset({A, B}),
    )

    assert engine.calls == [
        ("remove", "deps.plt", frozenset({A})),
        ("verify", "deps.plt", frozenset({B})),
        ("add", "deps.plt", frozenset({C})),
    ]
    assert result == {B, C}
    assert engine.contents(target) == {B, C}


def test_reconcile_skips_operations_with_nothing_to_do() -> None:
    engine = FakeEngine()
    target = store("deps")
    engine.seed(target, {A})

    _reconciler(engine).reconcile(target, frozenset({A, B}), recorded=frozenset({A}))

    assert engine.verbs() == ["verify", "add"]


def test_reconcile_twice_only_verifies_the_second_time() -> None:
    engine = FakeEngine()
    target = store("deps")
    engine.seed(target, {A, D})
    reconciler = _reconciler(engine)
    desired = frozenset({A, B, C})

    reconciler.reconcile(target, desired, recorded=engine.list_artifacts(target))
    engine.calls.clear()
    reconciler.reconcile(target, desired, recorded=engine.list_artifacts(target))

    assert engine.calls == [("verify", "deps.plt", desired)]


def test_reconcile_builds_missing_store_then_adds_artifacts() -> None:
    engine = FakeEngine()
    target = store("erlang")

    result = _reconciler(engine).reconcile(target, frozenset({A, B}), recorded=None)

    assert engine.calls == [
        ("build", "erlang.plt", frozenset()),
        ("add", "erlang.plt", frozenset({A, B})),
    ]
    assert result == {A, B}


def test_reconcile_checks_artifacts_put_in_place_by_build() -> None:
    engine = FakeEngine(built_contents=frozenset({A, D}))
    target = store("erlang")

    _reconciler(engine).reconcile(target, frozenset({A, B}), recorded=None)

    assert engine.verbs() == ["build", "remove", "verify", "add"]
    assert engine.contents(target) == {A, B}


def test_reconcile_copies_previous_store_when_missing() -> None:
    engine = FakeEngine()
    previous = store("elixir")
    target = store("deps")
    engine.seed(previous, {A, B})
    files = FakeStoreFiles(engine)
    reconciler = StoreReconciler(engine=engine, files=files)

    reconciler.reconcile(target, frozenset({A, B, C}), recorded=None, previous=previous)

    assert files.copies == [("elixir.plt", "deps.plt")]
    assert engine.verbs() == ["copy", "verify", "add"]
    assert engine.contents(previous) == {A, B}
    assert engine.contents(target) == {A, B, C}


def test_reconcile_fails_when_bootstrap_leaves_no_store() -> None:
    class _BrokenBuildEngine(FakeEngine):
        def build(self, store, components) -> None:  # noqa: ANN001
            self.calls.append(("build", store.name, frozenset()))

    engine = _BrokenBuildEngine()

    with pytest.raises(StoreError, match="Could not open"):
        _reconciler(engine).reconcile(store("erlang"), frozenset({A}), recorded=None)


def test_reconcile_builds_with_bootstrap_components() -> None:
    built_with: list[tuple[str, ...]] = []

    class _RecordingEngine(FakeEngine):
        def build(self, store, components) -> None:  # noqa: ANN001
            built_with.append(tuple(components))
            super().build(store, components)

    engine = _RecordingEngine()
    reconciler = StoreReconciler(
        engine=engine,
        files=FakeStoreFiles(engine),
        bootstrap_components=("erts", "kernel"),
    )

    reconciler.reconcile(store("erlang"), frozenset(), recorded=None)

    assert built_with == [("erts", "kernel")]
