"""Project selection configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .env import env_list
from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Components under analysis and extra code path directories."""

    components: tuple[str, ...]
    code_path: tuple[Path, ...] = ()


def get_project_config(
    *,
    components: Sequence[str] | None = None,
    code_path: Sequence[str] | None = None,
) -> ProjectConfig:
    """Merge CLI values with the environment; explicit values take precedence."""

    selected = tuple(components) if components else env_list("DIALYZE_APPS", separator=",")
    if not selected:
        raise MissingConfigurationError(
            "Missing configuration for: DIALYZE_APPS (or pass --app)"
        )
    directories = (
        tuple(code_path) if code_path else env_list("DIALYZE_CODE_PATH", separator=os.pathsep)
    )
    return ProjectConfig(
        components=tuple(dict.fromkeys(selected)),
        code_path=tuple(Path(directory).expanduser().resolve() for directory in directories),
    )
