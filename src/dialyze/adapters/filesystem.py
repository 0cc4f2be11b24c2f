"""Local filesystem access to store files."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from dialyze.domain.errors import StoreError

if TYPE_CHECKING:
    from dialyze.domain.model import AnalysisStore

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocalStoreFiles:
    def copy(self, source: AnalysisStore, target: AnalysisStore) -> None:
        """Copy ``source`` byte-for-byte over ``target``, creating its directory."""

        try:
            target.path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source.path, target.path)
        except OSError as exc:
            raise StoreError(f"Could not copy {source} to {target}: {exc}") from exc
        log.debug("Copied %s to %s", source.path, target.path)
