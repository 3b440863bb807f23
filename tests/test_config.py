import pytest

from email_extractor import config as config_module
from email_extractor.config import GEMINI_OPENAI_BASE_URL, Config, get_config, reload_config
from email_extractor.errors import ConfigurationError


@pytest.fixture(autouse=True)
def reset_singleton(monkeypatch):
    for name in ("GEMINI_API_KEY", "GEMINI_MODEL", "GEMINI_TEMPERATURE", "GEMINI_BASE_URL", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_config", None)
    yield


def test_from_env_defaults(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")

    config = Config.from_env()

    assert config.gemini.api_key == "test-key"
    assert config.gemini.model_name == "gemini-2.5-flash"
    assert config.gemini.temperature == 0.1
    assert config.gemini.base_url == GEMINI_OPENAI_BASE_URL
    assert config.paths.log_file is None
    assert config.validate_all() == []


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-pro")
    monkeypatch.setenv("GEMINI_TEMPERATURE", "0.4")
    monkeypatch.setenv("LOG_FILE", "extractor.log")

    config = Config.from_env()

    assert config.gemini.model_name == "gemini-2.5-pro"
    assert config.gemini.temperature == 0.4
    assert config.paths.log_file == "extractor.log"


def test_missing_api_key_is_configuration_error():
    assert Config.from_env().validate_all() == ["GEMINI_API_KEY is not set"]

    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY is not set"):
        get_config()


def test_invalid_values_are_configuration_errors(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("GEMINI_TEMPERATURE", "5")

    with pytest.raises(ConfigurationError):
        get_config()

    monkeypatch.setenv("GEMINI_TEMPERATURE", "warm")

    with pytest.raises(ConfigurationError):
        get_config()


def test_get_config_is_cached_until_reload(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "first-key")
    first = get_config()

    monkeypatch.setenv("GEMINI_API_KEY", "second-key")
    assert get_config() is first

    assert reload_config().gemini.api_key == "second-key"


def test_print_summary_hides_api_key(monkeypatch, capsys):
    monkeypatch.setenv("GEMINI_API_KEY", "super-secret")

    Config.from_env().print_summary()

    out = capsys.readouterr().out
    assert "gemini-2.5-flash" in out
    assert "super-secret" not in out
