"""Component manifests read from ``<name>.app`` files on the code path."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from dialyze.adapters.code_path import MANIFEST_SUFFIX
from dialyze.domain.errors import ManifestError

from .schema import ApplicationManifest
from .terms import parse_term

if TYPE_CHECKING:
    from pathlib import Path

    from dialyze.adapters.code_path import CodePath
    from dialyze.domain.model import Component, ComponentName

log = getLogger(__name__)


def read_manifest(path: Path) -> ApplicationManifest:
    """Parse and validate the manifest at ``path``."""

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Could not read {path}: {exc}") from exc
    try:
        return ApplicationManifest.from_term(parse_term(text))
    except ValueError as exc:
        raise ManifestError(f"Could not read {path}: {exc}") from exc


@dataclass(frozen=True, slots=True)
class CodePathManifestReader:
    """Resolve component names to manifests along the code path."""

    code_path: CodePath

    def read(self, name: ComponentName) -> Component:
        path = self.code_path.where_is_file(f"{name}{MANIFEST_SUFFIX}")
        if path is None:
            raise ManifestError(f"Unknown application {name}")
        log.debug("Reading %s", path)
        manifest = read_manifest(path)
        if manifest.name != name:
            raise ManifestError(f"{path} describes {manifest.name}, expected {name}")
        return manifest.to_component()
