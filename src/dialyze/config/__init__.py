"""Application configuration helpers."""

from __future__ import annotations

from .build import BuildConfig, get_build_config
from .env import env_flag, env_list, optional_env_var
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .project import ProjectConfig, get_project_config
from .storage import StorageConfig, get_storage_config
from .toolchain import ToolchainConfig, get_toolchain_config

__all__ = [
    "BuildConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "ProjectConfig",
    "StorageConfig",
    "ToolchainConfig",
    "configure_logging",
    "env_flag",
    "env_list",
    "get_build_config",
    "get_project_config",
    "get_storage_config",
    "get_toolchain_config",
    "optional_env_var",
]
