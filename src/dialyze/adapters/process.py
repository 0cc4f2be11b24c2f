"""Blocking subprocess execution shared by the command-line adapters."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        """Whatever the command printed, stderr first."""
        return "\n".join(part.strip() for part in (self.stderr, self.stdout) if part.strip())


CommandRunner: TypeAlias = "Callable[[Sequence[str]], CommandResult]"


def run_command(args: Sequence[str]) -> CommandResult:
    """Run ``args`` to completion; there is no timeout.

    Output that is not valid in the locale encoding is decoded with replacement
    characters. ``FileNotFoundError`` propagates when the executable does not exist.
    """

    log.debug("Running %s", " ".join(args))
    completed = subprocess.run(  # noqa: S603
        list(args),
        capture_output=True,
        text=True,
        errors="replace",
        check=False,
    )
    return CommandResult(
        args=tuple(args),
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
