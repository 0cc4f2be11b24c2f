"""Findings reported by the analysis engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Diagnostic:
    text: str

    def __str__(self) -> str:
        return self.text
