"""Analysis engine backed by the ``dialyzer`` command line."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from dialyze.adapters.process import CommandResult, run_command
from dialyze.config.toolchain import DEFAULT_DIALYZER, DEFAULT_ERL
from dialyze.domain.errors import EngineError
from dialyze.domain.model import normalize_artifact_path

from .warnings import parse_warnings

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from dialyze.adapters.process import CommandRunner
    from dialyze.domain.model import AnalysisStore, ArtifactPath, ComponentName, Diagnostic

log = getLogger(__name__)

EXIT_OK: Final = 0
EXIT_WARNINGS: Final = 2
EXIT_NO_SUCH_STORE: Final = 3

# Prints one stored file per line; exits 3 when the PLT does not exist.
PLT_INFO_SCRIPT: Final = (
    "[Plt] = init:get_plain_arguments(),"
    " case dialyzer:plt_info(Plt) of"
    " {ok, Info} ->"
    " [io:format(\"~ts~n\", [F]) || F <- proplists:get_value(files, Info, [])],"
    " halt(0);"
    " {error, no_such_file} -> halt(3);"
    " {error, Reason} -> io:format(standard_error, \"~tp~n\", [Reason]), halt(1)"
    " end."
)


def _paths(artifacts: Collection[ArtifactPath]) -> list[str]:
    return sorted(str(artifact) for artifact in artifacts)


@dataclass(slots=True)
class DialyzerCli:
    """Run engine verbs as ``dialyzer`` invocations; every call blocks."""

    dialyzer: str = DEFAULT_DIALYZER
    erl: str = DEFAULT_ERL
    runner: CommandRunner = field(default=run_command)

    def build(self, store: AnalysisStore, components: Sequence[ComponentName]) -> None:
        store.path.parent.mkdir(parents=True, exist_ok=True)
        self._run(
            [self.dialyzer, "--build_plt", "--output_plt", str(store), "--apps", *components],
            action=f"build {store.name}",
        )

    def add(self, store: AnalysisStore, artifacts: Collection[ArtifactPath]) -> None:
        self._run(
            [
                self.dialyzer,
                "--add_to_plt",
                "--no_check_plt",
                "--plt",
                str(store),
                "--output_plt",
                str(store),
                *_paths(artifacts),
            ],
            action=f"add modules to {store.name}",
        )

    def remove(self, store: AnalysisStore, artifacts: Collection[ArtifactPath]) -> None:
        self._run(
            [
                self.dialyzer,
                "--remove_from_plt",
                "--no_check_plt",
                "--plt",
                str(store),
                "--output_plt",
                str(store),
                *_paths(artifacts),
            ],
            action=f"remove modules from {store.name}",
        )

    def verify(self, store: AnalysisStore, artifacts: Collection[ArtifactPath]) -> None:
        # dialyzer re-checks every file of the PLT; the selection only sizes the log
        log.debug("Checking %s stored modules in %s", len(artifacts), store.name)
        self._run(
            [self.dialyzer, "--check_plt", "--plt", str(store)],
            action=f"check {store.name}",
        )

    def list_artifacts(self, store: AnalysisStore) -> frozenset[ArtifactPath] | None:
        result = self._execute(
            [self.erl, "-noshell", "-eval", PLT_INFO_SCRIPT, "-extra", str(store)],
            action=f"open {store.name}",
        )
        if result.returncode == EXIT_NO_SUCH_STORE:
            return None
        if result.returncode != EXIT_OK:
            raise EngineError(f"Could not open {store}", output=result.output)
        return frozenset(
            normalize_artifact_path(line.strip())
            for line in result.stdout.splitlines()
            if line.strip()
        )

    def analyse(
        self,
        stores: Sequence[AnalysisStore],
        artifacts: Collection[ArtifactPath],
        warnings: Sequence[str],
    ) -> list[Diagnostic]:
        with tempfile.TemporaryDirectory(prefix="dialyze-") as scratch:
            output = Path(scratch) / "warnings.txt"
            self._run(
                [
                    self.dialyzer,
                    "--no_check_plt",
                    "--fullpath",
                    "--quiet",
                    "-o",
                    str(output),
                    *(f"-W{option}" for option in warnings),
                    *_paths(artifacts),
                    # --plts consumes every following argument, so it goes last
                    "--plts",
                    *(str(store) for store in stores),
                ],
                action="analyse",
            )
            if not output.exists():
                return []
            return parse_warnings(output.read_text(encoding="utf-8"))

    def _run(self, args: list[str], *, action: str) -> CommandResult:
        result = self._execute(args, action=action)
        if result.returncode not in (EXIT_OK, EXIT_WARNINGS):
            raise EngineError(f"Dialyzer failed to {action}", output=result.output)
        return result

    def _execute(self, args: list[str], *, action: str) -> CommandResult:
        try:
            return self.runner(args)
        except OSError as exc:
            raise EngineError(f"Could not run {args[0]} to {action}: {exc}") from exc
