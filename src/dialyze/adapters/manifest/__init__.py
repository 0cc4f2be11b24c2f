"""Public interface for the application manifest adapter."""

from __future__ import annotations

from .reader import CodePathManifestReader, read_manifest
from .schema import ApplicationManifest, strip_version
from .terms import Atom, ImproperList, TermSyntaxError, parse_term

__all__ = [
    "ApplicationManifest",
    "Atom",
    "CodePathManifestReader",
    "ImproperList",
    "TermSyntaxError",
    "parse_term",
    "read_manifest",
    "strip_version",
]
