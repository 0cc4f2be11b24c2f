"""Warning categories recognised by the analysis engine."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class WarningFlag(StrEnum):
    RETURN = "return"
    UNUSED = "unused"
    IMPROPER_LISTS = "improper_lists"
    FUN_APP = "fun_app"
    MATCH = "match"
    OPAQUE = "opaque"
    FAIL_CALL = "fail_call"
    CONTRACTS = "contracts"
    BEHAVIOURS = "behaviours"
    UNDEFINED_CALLBACKS = "undefined_callbacks"

    UNMATCHED_RETURNS = "unmatched_returns"
    ERROR_HANDLING = "error_handling"
    RACE_CONDITIONS = "race_conditions"
    OVERSPECS = "overspecs"
    UNDERSPECS = "underspecs"
    UNKNOWN = "unknown"
    SPECDIFFS = "specdiffs"

    @property
    def enabled_by_default(self) -> bool:
        return self in DEFAULT_ENABLED


DEFAULT_ENABLED: tuple[WarningFlag, ...] = (
    WarningFlag.RETURN,
    WarningFlag.UNUSED,
    WarningFlag.IMPROPER_LISTS,
    WarningFlag.FUN_APP,
    WarningFlag.MATCH,
    WarningFlag.OPAQUE,
    WarningFlag.FAIL_CALL,
    WarningFlag.CONTRACTS,
    WarningFlag.BEHAVIOURS,
    WarningFlag.UNDEFINED_CALLBACKS,
)

DEFAULT_DISABLED: tuple[WarningFlag, ...] = (
    WarningFlag.UNMATCHED_RETURNS,
    WarningFlag.ERROR_HANDLING,
    WarningFlag.RACE_CONDITIONS,
    WarningFlag.OVERSPECS,
    WarningFlag.UNDERSPECS,
    WarningFlag.UNKNOWN,
    WarningFlag.SPECDIFFS,
)


def warning_options(selected: Mapping[WarningFlag, bool]) -> tuple[str, ...]:
    """Translate user toggles into engine options.

    Flags absent from ``selected`` keep their default. Extra warnings that were
    switched on come first, followed by ``no_<flag>`` for every default warning
    that was switched off.
    """

    extra = [flag.value for flag in DEFAULT_DISABLED if selected.get(flag, False)]
    suppressed = [f"no_{flag.value}" for flag in DEFAULT_ENABLED if not selected.get(flag, True)]
    return (*extra, *suppressed)
