"""Store location configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .build import BuildConfig, get_build_config
from .env import optional_env_var

DEFAULT_HOME_DIR_NAME: Final[str] = ".mix"
DEFAULT_BUILD_ROOT: Final[str] = "_build"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Directories holding the analysis stores.

    ``global_dir`` keeps the runtime layers shared between projects, while
    ``build_path`` keeps the project's dependency layer next to its build output.
    """

    global_dir: Path
    build_path: Path

    def resolve_global_dir(self) -> Path:
        return self.global_dir.expanduser().resolve()

    def resolve_build_path(self) -> Path:
        return self.build_path.expanduser().resolve()


def _default_global_dir() -> Path:
    mix_home = optional_env_var("MIX_HOME")
    if mix_home:
        return Path(mix_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


def get_storage_config(*, build: BuildConfig | None = None) -> StorageConfig:
    build_config = build or get_build_config()
    home = optional_env_var("DIALYZE_HOME")
    global_dir = Path(home) if home else _default_global_dir()
    build_path_env = optional_env_var("DIALYZE_BUILD_PATH")
    build_path = (
        Path(build_path_env) if build_path_env else Path(DEFAULT_BUILD_ROOT) / build_config.profile
    )
    return StorageConfig(
        global_dir=global_dir.expanduser().resolve(),
        build_path=build_path.expanduser().resolve(),
    )
