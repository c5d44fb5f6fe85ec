import pytest

from config import get_config, load_config
from core.errors import ConfigurationUnavailableError


def test_get_config_before_load_fails_clearly():
    with pytest.raises(ConfigurationUnavailableError, match="not loaded"):
        get_config()


def test_defaults():
    config = load_config()
    assert config.port == 3000
    assert config.max_input_length == 1000
    assert config.default_currency == "USD"
    assert config.default_urgency == "standard"
    assert config.llm_enabled is False
    assert config.llm_provider is None
    assert config.llm_confidence_threshold == 0.6
    assert config.llm_use_fallback is True


def test_load_is_idempotent(monkeypatch):
    first = load_config()
    monkeypatch.setenv("DEFAULT_CURRENCY", "EUR")
    assert load_config() is first
    assert get_config().default_currency == "USD"


def test_env_values_are_normalized(loaded_config):
    config = loaded_config(
        LOG_LEVEL="debug",
        DEFAULT_CURRENCY=" gbp ",
        LLM_ENABLED="true",
        LLM_PROVIDER="Claude",
        LLM_CONFIDENCE_THRESHOLD="0.75",
    )
    assert config.log_level == "DEBUG"
    assert config.default_currency == "GBP"
    assert config.llm_enabled is True
    assert config.llm_provider == "claude"
    assert config.llm_confidence_threshold == 0.75


def test_blank_values_use_defaults(loaded_config):
    config = loaded_config(LLM_PROVIDER="  ", PORT="")
    assert config.llm_provider is None
    assert config.port == 3000


def test_invalid_values_list_every_problem(loaded_config):
    with pytest.raises(ConfigurationUnavailableError) as exc:
        loaded_config(PORT="not-a-port", LLM_PROVIDER="skynet")

    message = str(exc.value)
    assert "port" in message
    assert "llm_provider" in message

    # A failed load caches nothing
    with pytest.raises(ConfigurationUnavailableError):
        get_config()
