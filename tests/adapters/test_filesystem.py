from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from dialyze.adapters.filesystem import LocalStoreFiles
from dialyze.domain.errors import StoreError
from dialyze.domain.model import AnalysisStore

if TYPE_CHECKING:
    from pathlib import Path


def test_copy_creates_target_directory(tmp_path: Path) -> None:
    source = AnalysisStore(tmp_path / "global" / "base.plt")
    source.path.parent.mkdir()
    source.path.write_bytes(b"\x00plt\xff")
    target = AnalysisStore(tmp_path / "_build" / "dev" / "deps.plt")

    LocalStoreFiles().copy(source, target)

    assert target.path.read_bytes() == b"\x00plt\xff"


def test_copy_overwrites_existing_target(tmp_path: Path) -> None:
    source = AnalysisStore(tmp_path / "base.plt")
    source.path.write_bytes(b"new")
    target = AnalysisStore(tmp_path / "deps.plt")
    target.path.write_bytes(b"old contents")

    LocalStoreFiles().copy(source, target)

    assert target.path.read_bytes() == b"new"


def test_copy_of_missing_source_raises_store_error(tmp_path: Path) -> None:
    with pytest.raises(StoreError, match="Could not copy"):
        LocalStoreFiles().copy(
            AnalysisStore(tmp_path / "missing.plt"),
            AnalysisStore(tmp_path / "deps.plt"),
        )
