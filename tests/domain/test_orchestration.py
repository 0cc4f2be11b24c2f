from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from dialyze.domain.errors import ManifestError, ModuleCollisionError, StoreError
from dialyze.domain.model import Diagnostic
from dialyze.domain.orchestration import (
    DialyzePorts,
    DialyzeRequest,
    project_info,
    run_dialyze,
)
from dialyze.domain.stores import StoreLayerPlanner, StoreNames, StoreReconciler, store_layers
from tests.helpers.fakes import (
    FakeArtifactFinder,
    FakeEngine,
    FakeManifestReader,
    FakeStoreFiles,
    component,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dialyze.domain.model import StoreLayer

NAMES = StoreNames(otp_version="26.2", elixir_version="1.16.0", build_env="dev")
GLOBAL_DIR = Path("/home/me/.mix")
LOCAL_DIR = Path("/work/_build/dev")
DEPS_STORE = LOCAL_DIR / NAMES.dependencies


def _layers(dependencies: Iterable[str]) -> tuple[StoreLayer, ...]:
    return store_layers(dependencies, names=NAMES, global_dir=GLOBAL_DIR, local_dir=LOCAL_DIR)


class _Compiler:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


def _ports(engine: FakeEngine, *, reader: FakeManifestReader | None = None) -> DialyzePorts:
    active_reader = reader or FakeManifestReader(
        [
            component("erts", ["erlang"]),
            component("kernel", ["application"], ["erts"]),
            component("stdlib", ["lists"], ["kernel"]),
            component("crypto", ["crypto"], ["kernel"]),
            component("elixir", ["Elixir.Enum"], ["kernel", "stdlib"]),
            component("jason", ["Elixir.Jason"], ["elixir"]),
            component("my_app", ["Elixir.MyApp"], ["kernel", "jason", "my_lib"]),
            component("my_lib", ["Elixir.MyLib"], ["elixir"]),
        ]
    )
    finder = FakeArtifactFinder()
    return DialyzePorts(
        reader=active_reader,
        finder=finder,
        engine=engine,
        planner=StoreLayerPlanner(
            engine=engine,
            reader=active_reader,
            finder=finder,
            reconciler=StoreReconciler(engine=engine, files=FakeStoreFiles(engine)),
        ),
        layers=_layers,
        compiler=_Compiler(),
    )


def test_project_info_excludes_project_components_from_dependencies() -> None:
    reader = FakeManifestReader(
        [
            component("my_app", ["Elixir.MyApp"], ["kernel", "jason", "my_lib"]),
            component("my_lib", ["Elixir.MyLib"], ["elixir", "kernel"]),
        ]
    )

    info = project_info(("my_app", "my_lib"), reader=reader)

    assert info.modules == {"Elixir.MyApp", "Elixir.MyLib"}
    assert info.dependencies == ("jason", "kernel", "elixir")
    assert reader.reads == ["my_app", "my_lib"]


def test_run_dialyze_compiles_reconciles_and_analyses() -> None:
    engine = FakeEngine(diagnostics=[Diagnostic("lib/my_app.ex:4: no local return")])
    ports = _ports(engine)

    result = run_dialyze(DialyzeRequest(project=("my_app", "my_lib")), ports=ports)

    assert isinstance(ports.compiler, _Compiler)
    assert ports.compiler.calls == 1
    assert [verb for verb, *_ in engine.calls] == [
        "build",
        "add",
        "copy",
        "verify",
        "add",
        "copy",
        "verify",
        "add",
        "analyse",
    ]
    stores, artifacts, _warnings = engine.analysed[0]
    assert [item.path for item in stores] == [DEPS_STORE]
    assert {path.stem for path in artifacts} == {"Elixir.MyApp", "Elixir.MyLib"}
    assert not result.succeeded
    assert result.diagnostics == [Diagnostic("lib/my_app.ex:4: no local return")]
    assert {path.stem for path in result.stored_artifacts} == {
        "erlang",
        "application",
        "lists",
        "crypto",
        "Elixir.Enum",
        "Elixir.Jason",
    }


def test_run_dialyze_without_compile_or_analysis() -> None:
    engine = FakeEngine(diagnostics=[Diagnostic("unused")])
    ports = _ports(engine)

    result = run_dialyze(
        DialyzeRequest(project=("my_app", "my_lib"), compile=False, analyse=False),
        ports=ports,
    )

    assert isinstance(ports.compiler, _Compiler)
    assert ports.compiler.calls == 0
    assert result.succeeded
    assert "analyse" not in engine.verbs()


def test_run_dialyze_without_check_uses_existing_store() -> None:
    engine = FakeEngine()
    ports = _ports(engine)
    run_dialyze(DialyzeRequest(project=("my_app", "my_lib"), analyse=False), ports=ports)
    engine.calls.clear()

    result = run_dialyze(
        DialyzeRequest(project=("my_app", "my_lib"), compile=False, check=False),
        ports=ports,
    )

    assert engine.verbs() == ["analyse"]
    assert result.succeeded


def test_run_dialyze_without_check_requires_a_store() -> None:
    engine = FakeEngine()

    with pytest.raises(StoreError):
        run_dialyze(
            DialyzeRequest(project=("my_app",), compile=False, check=False),
            ports=_ports(engine),
        )


def test_run_dialyze_rejects_project_modules_in_stores() -> None:
    engine = FakeEngine()
    reader = FakeManifestReader(
        [
            component("erts", ["erlang"]),
            component("kernel", ["application"], ["erts"]),
            component("stdlib", ["lists"], ["kernel"]),
            component("crypto", ["crypto"], ["kernel"]),
            component("elixir", ["Elixir.Enum"], ["kernel", "stdlib"]),
            component("my_app", ["Elixir.MyApp", "lists"], ["kernel"]),
        ]
    )

    with pytest.raises(ModuleCollisionError) as excinfo:
        run_dialyze(
            DialyzeRequest(project=("my_app",), compile=False),
            ports=_ports(engine, reader=reader),
        )

    assert excinfo.value.clashes == ("lists",)
    assert "analyse" not in engine.verbs()


def test_run_dialyze_fails_on_unknown_project_component() -> None:
    with pytest.raises(ManifestError):
        run_dialyze(
            DialyzeRequest(project=("nope",), compile=False),
            ports=_ports(FakeEngine()),
        )


def test_run_dialyze_requires_compiler_when_compiling() -> None:
    ports = _ports(FakeEngine())
    ports.compiler = None

    with pytest.raises(ValueError, match="compiler"):
        run_dialyze(DialyzeRequest(project=("my_app",)), ports=ports)
