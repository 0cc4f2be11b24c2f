"""External toolchain configuration values."""

from __future__ import annotations

import shlex
from dataclasses import dataclass

from .env import optional_env_var

DEFAULT_DIALYZER = "dialyzer"
DEFAULT_ERL = "erl"
DEFAULT_ELIXIR = "elixir"
DEFAULT_COMPILE_COMMAND = ("mix", "compile")


@dataclass(frozen=True, slots=True)
class ToolchainConfig:
    dialyzer: str = DEFAULT_DIALYZER
    erl: str = DEFAULT_ERL
    elixir: str = DEFAULT_ELIXIR
    compile_command: tuple[str, ...] = DEFAULT_COMPILE_COMMAND


def get_toolchain_config() -> ToolchainConfig:
    compile_command = optional_env_var("DIALYZE_COMPILE_COMMAND")
    return ToolchainConfig(
        dialyzer=optional_env_var("DIALYZE_DIALYZER") or DEFAULT_DIALYZER,
        erl=optional_env_var("DIALYZE_ERL") or DEFAULT_ERL,
        elixir=optional_env_var("DIALYZE_ELIXIR") or DEFAULT_ELIXIR,
        compile_command=(
            tuple(shlex.split(compile_command)) if compile_command else DEFAULT_COMPILE_COMMAND
        ),
    )
