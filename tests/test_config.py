import pytest

from colorsense.core.config import (
    GEMINI_OPENAI_BASE_URL,
    AppSettings,
    get_user_config_dir,
    write_user_env_vars,
)
from colorsense.core.errors import ConfigurationError


def test_defaults():
    settings = AppSettings(_env_file=None)
    assert settings.ai_api_key is None
    assert settings.ai_base_url == GEMINI_OPENAI_BASE_URL
    assert settings.ai_model == "gemini-2.0-flash-lite"
    assert settings.batch_size == 5
    assert settings.batch_delay_ms == 100
    assert settings.validator_fallback_valid is True
    assert settings.ai_timeout_seconds is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("COLORSENSE_AI_API_KEY", "from-env")
    monkeypatch.setenv("COLORSENSE_BATCH_SIZE", "3")
    monkeypatch.setenv("COLORSENSE_VALIDATOR_FALLBACK_VALID", "false")

    settings = AppSettings(_env_file=None)

    assert settings.require_api_key() == "from-env"
    assert settings.batch_size == 3
    assert settings.validator_fallback_valid is False


def test_env_file_is_read(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("COLORSENSE_AI_MODEL=gpt-4o-mini\nCOLORSENSE_BATCH_DELAY_MS=250\n", encoding="utf-8")

    settings = AppSettings(_env_file=str(env_file))

    assert settings.ai_model == "gpt-4o-mini"
    assert settings.batch_delay_ms == 250


@pytest.mark.parametrize("key", [None, "", "   "])
def test_require_api_key_raises_configuration_error(key):
    with pytest.raises(ConfigurationError, match="COLORSENSE_AI_API_KEY"):
        AppSettings(_env_file=None, ai_api_key=key).require_api_key()


def test_invalid_batch_size_is_rejected():
    with pytest.raises(ValueError):
        AppSettings(_env_file=None, batch_size=0)


def test_write_user_env_vars_merges_existing_values(tmp_path):
    env_path = tmp_path / "colorsense" / ".env"
    write_user_env_vars({"COLORSENSE_AI_MODEL": "a", "COLORSENSE_AI_API_KEY": "k1"}, env_path)
    write_user_env_vars({"COLORSENSE_AI_API_KEY": "k2"}, env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()

    assert lines[0].startswith("#")
    assert "COLORSENSE_AI_API_KEY=k2" in lines
    assert "COLORSENSE_AI_MODEL=a" in lines


def test_user_config_dir_honours_xdg(monkeypatch, tmp_path):
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_user_config_dir() == tmp_path / "colorsense"
