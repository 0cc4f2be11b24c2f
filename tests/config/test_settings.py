from __future__ import annotations

import os
from pathlib import Path

import pytest

from dialyze.config import (
    BuildConfig,
    MissingConfigurationError,
    get_build_config,
    get_project_config,
    get_storage_config,
    get_toolchain_config,
)


def test_build_config_defaults() -> None:
    config = get_build_config()

    assert config == BuildConfig(env="dev", per_environment=True)
    assert config.profile == "dev"


def test_build_config_shares_output_between_environments(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("MIX_ENV", "test")
    monkeypatch.setenv("DIALYZE_BUILD_PER_ENVIRONMENT", "false")

    config = get_build_config()

    assert config.env == "test"
    assert config.profile == "shared"


def test_storage_config_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)

    config = get_storage_config(build=BuildConfig(env="test"))

    assert config.global_dir == (tmp_path / ".mix").resolve()
    assert config.build_path == (tmp_path / "_build" / "test").resolve()


def test_storage_config_prefers_dialyze_home(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("MIX_HOME", str(tmp_path / "mix"))
    monkeypatch.setenv("DIALYZE_HOME", str(tmp_path / "plts"))
    monkeypatch.setenv("DIALYZE_BUILD_PATH", str(tmp_path / "out"))

    config = get_storage_config()

    assert config.resolve_global_dir() == (tmp_path / "plts").resolve()
    assert config.resolve_build_path() == (tmp_path / "out").resolve()


def test_storage_config_falls_back_to_mix_home(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("MIX_HOME", str(tmp_path / "mix"))

    assert get_storage_config().global_dir == (tmp_path / "mix").resolve()


def test_toolchain_config_defaults() -> None:
    config = get_toolchain_config()

    assert config.dialyzer == "dialyzer"
    assert config.erl == "erl"
    assert config.elixir == "elixir"
    assert config.compile_command == ("mix", "compile")


def test_toolchain_config_splits_compile_command(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DIALYZE_COMPILE_COMMAND", "rebar3 compile --deps_only 'a b'")
    monkeypatch.setenv("DIALYZE_DIALYZER", "/opt/otp/bin/dialyzer")

    config = get_toolchain_config()

    assert config.compile_command == ("rebar3", "compile", "--deps_only", "a b")
    assert config.dialyzer == "/opt/otp/bin/dialyzer"


def test_project_config_reads_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("DIALYZE_APPS", "app_a,app_b,app_a")
    monkeypatch.setenv("DIALYZE_CODE_PATH", os.pathsep.join([str(tmp_path / "a"), str(tmp_path)]))

    config = get_project_config()

    assert config.components == ("app_a", "app_b")
    assert config.code_path == ((tmp_path / "a").resolve(), tmp_path.resolve())


def test_project_config_prefers_explicit_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DIALYZE_APPS", "from_env")

    config = get_project_config(components=["from_cli"])

    assert config.components == ("from_cli",)
    assert config.code_path == ()


def test_project_config_requires_components() -> None:
    with pytest.raises(MissingConfigurationError, match="DIALYZE_APPS"):
        get_project_config()
