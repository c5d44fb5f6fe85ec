import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from agents.completion_provider import (
    AnthropicCompletionProvider,
    CompletionOptions,
    GoogleCompletionProvider,
    OpenAICompletionProvider,
    PydanticAIProvider,
    create_provider,
    get_configured_provider,
)
from core.errors import LLMProviderError


@pytest.mark.parametrize(
    "name,expected",
    [
        ("google", GoogleCompletionProvider),
        ("claude", AnthropicCompletionProvider),
        ("anthropic", AnthropicCompletionProvider),
        ("OpenAI", OpenAICompletionProvider),
    ],
)
def test_create_provider(name, expected):
    assert isinstance(create_provider(name), expected)


def test_unknown_provider_name():
    with pytest.raises(LLMProviderError, match="Unknown LLM provider"):
        create_provider("skynet")


def test_is_configured_follows_api_key(monkeypatch):
    assert OpenAICompletionProvider().is_configured() is False
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    assert OpenAICompletionProvider().is_configured() is True


def test_model_name_from_env(monkeypatch):
    assert GoogleCompletionProvider().model_name == "gemini-2.0-flash"
    monkeypatch.setenv("GOOGLE_MODEL", "gemini-2.5-pro")
    assert GoogleCompletionProvider().model_name == "gemini-2.5-pro"


def test_no_provider_without_configuration():
    assert get_configured_provider() is None


def test_no_provider_when_llm_disabled(loaded_config):
    loaded_config(LLM_PROVIDER="google", GOOGLE_API_KEY="key")
    assert get_configured_provider() is None


def test_no_provider_without_api_key(loaded_config):
    loaded_config(LLM_ENABLED="true", LLM_PROVIDER="claude")
    assert get_configured_provider() is None


def test_configured_provider(loaded_config):
    loaded_config(LLM_ENABLED="true", LLM_PROVIDER="google", GOOGLE_API_KEY="key")
    provider = get_configured_provider()
    assert isinstance(provider, GoogleCompletionProvider)
    assert provider.is_configured()


def test_call_without_key_fails():
    provider = AnthropicCompletionProvider(api_key="")
    with pytest.raises(LLMProviderError, match="ANTHROPIC_API_KEY"):
        asyncio.run(provider.call("hello"))


def test_call_runs_a_pydantic_ai_agent():
    provider = GoogleCompletionProvider(api_key="key")
    options = CompletionOptions(temperature=0.1, max_tokens=50, system_prompt="Return JSON")

    with patch.object(GoogleCompletionProvider, "_build_model", return_value="fake-model"), \
         patch("agents.completion_provider.Agent") as mock_agent_cls:
        mock_agent = MagicMock()
        mock_agent.run = AsyncMock(return_value=MagicMock(output='{"amount": 5}'))
        mock_agent_cls.return_value = mock_agent

        reply = asyncio.run(provider.call("Parse this", options))

    assert reply == '{"amount": 5}'
    mock_agent_cls.assert_called_once_with("fake-model", system_prompt="Return JSON", output_type=str)
    mock_agent.run.assert_awaited_once_with(
        "Parse this", model_settings={"temperature": 0.1, "max_tokens": 50}
    )


def test_agent_failure_is_wrapped():
    provider = OpenAICompletionProvider(api_key="key")

    with patch.object(OpenAICompletionProvider, "_build_model", return_value="fake-model"), \
         patch("agents.completion_provider.Agent") as mock_agent_cls:
        mock_agent_cls.return_value.run = AsyncMock(side_effect=RuntimeError("quota exceeded"))

        with pytest.raises(LLMProviderError, match="quota exceeded"):
            asyncio.run(provider.call("Parse this"))


def test_model_build_failure_is_wrapped():
    provider = AnthropicCompletionProvider(api_key="key")

    with patch.object(
        AnthropicCompletionProvider,
        "_build_model",
        side_effect=ImportError("anthropic support is not installed"),
    ):
        with pytest.raises(LLMProviderError, match="anthropic support is not installed"):
            asyncio.run(provider.call("Parse this"))


def test_base_provider_is_abstract():
    with pytest.raises(TypeError):
        PydanticAIProvider(api_key="key")
