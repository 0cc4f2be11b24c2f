from __future__ import annotations

import pytest

DIALYZE_ENV_VARS = (
    "DIALYZE_APPS",
    "DIALYZE_BUILD_PATH",
    "DIALYZE_BUILD_PER_ENVIRONMENT",
    "DIALYZE_CODE_PATH",
    "DIALYZE_COMPILE_COMMAND",
    "DIALYZE_DIALYZER",
    "DIALYZE_ELIXIR",
    "DIALYZE_ERL",
    "DIALYZE_HOME",
    "MIX_ENV",
    "MIX_HOME",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in DIALYZE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
