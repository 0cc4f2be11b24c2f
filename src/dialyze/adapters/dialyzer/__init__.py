"""Dialyzer-backed analysis engine adapter."""

from __future__ import annotations

from .client import DialyzerCli
from .warnings import parse_warnings

__all__ = ["DialyzerCli", "parse_warnings"]
