from __future__ import annotations

import pytest

from colorsense.core.config import AppSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "COLORSENSE_AI_API_KEY",
        "COLORSENSE_AI_BASE_URL",
        "COLORSENSE_AI_MODEL",
        "COLORSENSE_BATCH_SIZE",
        "COLORSENSE_BATCH_DELAY_MS",
        "COLORSENSE_VALIDATOR_FALLBACK_VALID",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, ai_api_key="test-key", batch_delay_ms=0)


@pytest.fixture
def unconfigured_settings() -> AppSettings:
    return AppSettings(_env_file=None, ai_api_key=None)
