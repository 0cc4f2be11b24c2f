"""Compile step run before the project's artifacts are located."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from dialyze.adapters.process import run_command
from dialyze.config.toolchain import DEFAULT_COMPILE_COMMAND
from dialyze.domain.errors import CompileError

if TYPE_CHECKING:
    from dialyze.adapters.process import CommandRunner

log = getLogger(__name__)


@dataclass(slots=True)
class ShellCompiler:
    command: tuple[str, ...] = DEFAULT_COMPILE_COMMAND
    runner: CommandRunner = field(default=run_command)

    def __call__(self) -> None:
        log.info("Compiling with %s", " ".join(self.command))
        try:
            result = self.runner(self.command)
        except OSError as exc:
            raise CompileError(f"Could not run {self.command[0]}: {exc}") from exc
        if result.returncode != 0:
            raise CompileError(f"Compilation failed: {result.output}")
