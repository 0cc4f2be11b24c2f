# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from dialyze.app import dialyze_project
from dialyze.config import ConfigurationError, configure_logging
from dialyze.domain.errors import DialyzeError
from dialyze.domain.warnings import WarningFlag, warning_options

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_FATAL = 1
EXIT_DIAGNOSTICS = 2


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Analyse the current project using success typing",
    )
    parser.add_argument(
        "--compile",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Compile the project before analysis (default: %(default)s)",
    )
    parser.add_argument(
        "--check",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Build or check the PLTs before analysis (default: %(default)s)",
    )
    parser.add_argument(
        "--analyse",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Analyse the project's modules (default: %(default)s)",
    )
    parser.add_argument(
        "--app",
        dest="apps",
        action="append",
        metavar="NAME",
        help="Application under analysis; repeat for several (defaults to DIALYZE_APPS)",
    )
    parser.add_argument(
        "--code-path",
        dest="code_path",
        action="append",
        metavar="DIR",
        help="Extra directory searched before the build and runtime code path",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output",
    )

    warnings = parser.add_argument_group("warnings")
    for flag in WarningFlag:
        warnings.add_argument(
            f"--{flag.value.replace('_', '-')}",
            dest=f"warning_{flag.value}",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="On by default" if flag.enabled_by_default else "Off by default",
        )

    return parser.parse_args(list(argv))


def _selected_warnings(args: argparse.Namespace) -> dict[WarningFlag, bool]:
    selected: dict[WarningFlag, bool] = {}
    for flag in WarningFlag:
        value = getattr(args, f"warning_{flag.value}")
        if value is not None:
            selected[flag] = value
    return selected


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        result = dialyze_project(
            components=parsed_args.apps,
            code_path=parsed_args.code_path,
            compile=parsed_args.compile,
            check=parsed_args.check,
            analyse=parsed_args.analyse,
            warnings=warning_options(_selected_warnings(parsed_args)),
        )
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(EXIT_FATAL)
    except DialyzeError:
        log.exception("Dialyzer error")
        sys.exit(EXIT_FATAL)

    if result.succeeded:
        return

    for diagnostic in result.diagnostics:
        print(diagnostic)
    log.error("Dialyzer reported %s warnings", len(result.diagnostics))
    sys.exit(EXIT_DIAGNOSTICS)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
