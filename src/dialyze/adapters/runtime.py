"""Probe the installed Erlang/OTP and Elixir runtimes."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from dialyze.adapters.process import run_command
from dialyze.config.toolchain import DEFAULT_ELIXIR
from dialyze.domain.errors import EngineError

if TYPE_CHECKING:
    from dialyze.adapters.process import CommandRunner

log = getLogger(__name__)

PROBE_SCRIPT: Final = (
    'IO.puts("otp_release=#{:erlang.system_info(:otp_release)}"); '
    'IO.puts("root_dir=#{:code.root_dir()}"); '
    'IO.puts("elixir_version=#{System.version()}"); '
    'Enum.each(:code.get_path(), &IO.puts("code_path=#{&1}"))'
)


@dataclass(frozen=True, slots=True)
class RuntimeInfo:
    otp_version: str
    elixir_version: str
    code_path: tuple[Path, ...] = field(default_factory=tuple["Path", ...])


def resolve_otp_version(root_dir: Path, major: str) -> str:
    """Return the full OTP version, falling back to the major release.

    The full version lives in ``<root>/releases/<major>/OTP_VERSION``; a missing,
    unreadable or multi-line file yields ``major``.
    """

    version_file = root_dir / "releases" / major / "OTP_VERSION"
    try:
        lines = [line.strip() for line in version_file.read_text().splitlines() if line.strip()]
    except OSError:
        return major
    if len(lines) == 1:
        return lines[0]
    return major


def parse_probe_output(output: str) -> RuntimeInfo:
    values: dict[str, str] = {}
    code_path: list[Path] = []
    for line in output.splitlines():
        key, separator, value = line.partition("=")
        if not separator:
            continue
        if key == "code_path":
            code_path.append(Path(value).resolve())
        else:
            values[key] = value.strip()

    missing = [key for key in ("otp_release", "root_dir", "elixir_version") if key not in values]
    if missing:
        raise EngineError(f"Runtime probe did not report {', '.join(missing)}")

    return RuntimeInfo(
        otp_version=resolve_otp_version(Path(values["root_dir"]), values["otp_release"]),
        elixir_version=values["elixir_version"],
        code_path=tuple(code_path),
    )


def probe_runtime(
    *,
    elixir: str = DEFAULT_ELIXIR,
    runner: CommandRunner = run_command,
) -> RuntimeInfo:
    """Ask the Elixir runtime for its versions and code path."""

    try:
        result = runner([elixir, "-e", PROBE_SCRIPT])
    except OSError as exc:
        raise EngineError(f"Could not run {elixir}: {exc}") from exc
    if result.returncode != 0:
        raise EngineError("Could not probe the Elixir runtime", output=result.output)
    info = parse_probe_output(result.stdout)
    log.debug(
        "Runtime: OTP %s, Elixir %s, %s code path entries",
        info.otp_version,
        info.elixir_version,
        len(info.code_path),
    )
    return info
