"""Build environment configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag, optional_env_var

DEFAULT_BUILD_ENV = "dev"
SHARED_BUILD_PROFILE = "shared"


@dataclass(frozen=True, slots=True)
class BuildConfig:
    env: str = DEFAULT_BUILD_ENV
    per_environment: bool = True

    @property
    def profile(self) -> str:
        """Identifier of the build output shared by this environment."""
        return self.env if self.per_environment else SHARED_BUILD_PROFILE


def get_build_config() -> BuildConfig:
    return BuildConfig(
        env=optional_env_var("MIX_ENV") or DEFAULT_BUILD_ENV,
        per_environment=env_flag("DIALYZE_BUILD_PER_ENVIRONMENT", default=True),
    )
