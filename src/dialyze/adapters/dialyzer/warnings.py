"""Parsing of dialyzer's plain-text warning output."""

from __future__ import annotations

from dialyze.domain.model import Diagnostic


def parse_warnings(text: str) -> list[Diagnostic]:
    """Split warning output into diagnostics, keeping their order.

    A warning starts on an unindented line; indented lines continue it.
    """

    groups: list[list[str]] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        if line[0].isspace() and groups:
            groups[-1].append(line)
        else:
            groups.append([line])
    return [Diagnostic("\n".join(group)) for group in groups]
