"""Application orchestration entry points."""

from __future__ import annotations

from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from dialyze.adapters.code_path import CodePath, CodePathArtifactFinder
from dialyze.adapters.compiler import ShellCompiler
from dialyze.adapters.dialyzer import DialyzerCli
from dialyze.adapters.filesystem import LocalStoreFiles
from dialyze.adapters.manifest import CodePathManifestReader
from dialyze.adapters.runtime import probe_runtime
from dialyze.config import (
    get_build_config,
    get_project_config,
    get_storage_config,
    get_toolchain_config,
)
from dialyze.domain.orchestration import DialyzePorts, DialyzeRequest, run_dialyze
from dialyze.domain.stores import StoreLayerPlanner, StoreNames, StoreReconciler, store_layers

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dialyze.adapters.runtime import RuntimeInfo
    from dialyze.config import BuildConfig, ProjectConfig, StorageConfig, ToolchainConfig
    from dialyze.domain.orchestration import DialyzeResult

log = getLogger(__name__)


def build_ports(
    *,
    project: ProjectConfig,
    build: BuildConfig,
    storage: StorageConfig,
    toolchain: ToolchainConfig,
    runtime: RuntimeInfo,
) -> DialyzePorts:
    """Wire the default adapters for one invocation."""

    code_path = CodePath(
        extra=project.code_path,
        build_path=storage.resolve_build_path(),
        runtime=runtime.code_path,
    )
    reader = CodePathManifestReader(code_path)
    finder = CodePathArtifactFinder(code_path)
    engine = DialyzerCli(dialyzer=toolchain.dialyzer, erl=toolchain.erl)
    names = StoreNames(
        otp_version=runtime.otp_version,
        elixir_version=runtime.elixir_version,
        build_env=build.profile,
    )
    return DialyzePorts(
        reader=reader,
        finder=finder,
        engine=engine,
        planner=StoreLayerPlanner(
            engine=engine,
            reader=reader,
            finder=finder,
            reconciler=StoreReconciler(engine=engine, files=LocalStoreFiles()),
        ),
        layers=partial(
            store_layers,
            names=names,
            global_dir=storage.resolve_global_dir(),
            local_dir=storage.resolve_build_path(),
        ),
        compiler=ShellCompiler(command=toolchain.compile_command),
    )


def dialyze_project(
    *,
    components: Sequence[str] | None = None,
    code_path: Sequence[str] | None = None,
    compile: bool = True,  # noqa: A002
    check: bool = True,
    analyse: bool = True,
    warnings: Sequence[str] = (),
) -> DialyzeResult:
    """Run dialyze for the configured project using the default adapters."""

    project = get_project_config(components=components, code_path=code_path)
    build = get_build_config()
    storage = get_storage_config(build=build)
    toolchain = get_toolchain_config()
    runtime = probe_runtime(elixir=toolchain.elixir)
    log.info(
        "Using OTP %s, Elixir %s, build profile %s",
        runtime.otp_version,
        runtime.elixir_version,
        build.profile,
    )

    ports = build_ports(
        project=project,
        build=build,
        storage=storage,
        toolchain=toolchain,
        runtime=runtime,
    )
    request = DialyzeRequest(
        project=project.components,
        compile=compile,
        check=check,
        analyse=analyse,
        warnings=tuple(warnings),
    )
    return run_dialyze(request, ports=ports)
