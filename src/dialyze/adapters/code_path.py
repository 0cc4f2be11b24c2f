"""Search-path lookups of manifests and compiled modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from dialyze.domain.model import ModuleName

log = getLogger(__name__)

ARTIFACT_SUFFIX = ".beam"
MANIFEST_SUFFIX = ".app"


def build_ebin_directories(build_path: Path) -> tuple[Path, ...]:
    """``ebin`` directories of every component compiled under ``build_path``."""

    lib_dir = build_path / "lib"
    if not lib_dir.is_dir():
        log.debug("No compiled components under %s", lib_dir)
        return ()
    return tuple(sorted(path for path in lib_dir.glob("*/ebin") if path.is_dir()))


@dataclass(slots=True)
class CodePath:
    """Ordered directories searched for files; the first match wins.

    Directories come from ``extra``, then the components compiled under
    ``build_path``, then ``runtime``. They are collected on first lookup so a
    compile step that runs after construction is still picked up.
    """

    extra: tuple[Path, ...] = ()
    build_path: Path | None = None
    runtime: tuple[Path, ...] = ()
    _directories: tuple[Path, ...] | None = field(default=None, init=False, repr=False)

    @property
    def directories(self) -> tuple[Path, ...]:
        if self._directories is None:
            built = build_ebin_directories(self.build_path) if self.build_path else ()
            self._directories = tuple(dict.fromkeys((*self.extra, *built, *self.runtime)))
            log.debug("Code path has %s directories", len(self._directories))
        return self._directories

    def where_is_file(self, filename: str) -> Path | None:
        for directory in self.directories:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        return None


@dataclass(frozen=True, slots=True)
class CodePathArtifactFinder:
    """Locate ``<module>.beam`` along the code path."""

    code_path: CodePath

    def find(self, module: ModuleName) -> Path | None:
        return self.code_path.where_is_file(f"{module}{ARTIFACT_SUFFIX}")
