# FILE: agents/completion_provider.py
"""
Text-completion backends for the enhancement step.

The parser only sees `CompletionProvider` (call + is_configured). The three
concrete backends all run through a pydantic-ai `Agent`; they differ only in
which pydantic-ai model/provider pair they build and which API key they read.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional, Protocol

from pydantic import BaseModel, Field
from pydantic_ai import Agent

from config import get_config
from core.errors import ConfigurationUnavailableError, LLMProviderError

# -----------------------------
# Logging Setup
# -----------------------------
logger = logging.getLogger("completion_provider")
logger.setLevel(logging.INFO)
if not logger.handlers:
    sh = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    sh.setFormatter(formatter)
    logger.addHandler(sh)


class CompletionOptions(BaseModel):
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, gt=0)
    system_prompt: Optional[str] = None


class CompletionProvider(Protocol):
    async def call(self, prompt: str, options: Optional[CompletionOptions] = None) -> str:
        ...

    def is_configured(self) -> bool:
        ...


class PydanticAIProvider(ABC):
    """
    Shared plumbing: API key lookup, Agent construction, error wrapping.
    Subclasses only say which env vars to read and how to build the model.
    """

    name = "base"
    api_key_env = ""
    model_env = ""
    default_model = ""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.api_key = api_key if api_key is not None else os.getenv(self.api_key_env)
        self.model_name = model_name or os.getenv(self.model_env) or self.default_model

    def is_configured(self) -> bool:
        return bool(self.api_key)

    @abstractmethod
    def _build_model(self):
        pass

    async def call(self, prompt: str, options: Optional[CompletionOptions] = None) -> str:
        if not self.is_configured():
            raise LLMProviderError(f"{self.name} provider is not configured (set {self.api_key_env})")

        options = options or CompletionOptions()
        settings = {}
        if options.temperature is not None:
            settings["temperature"] = options.temperature
        if options.max_tokens is not None:
            settings["max_tokens"] = options.max_tokens

        try:
            agent = Agent(
                self._build_model(),
                system_prompt=options.system_prompt or (),
                output_type=str,
            )
            result = await agent.run(prompt, model_settings=settings or None)
        except Exception as e:
            logger.error(f"{self.name} completion failed: {e}")
            raise LLMProviderError(f"{self.name} completion failed: {e}") from e

        return result.output


class GoogleCompletionProvider(PydanticAIProvider):
    name = "google"
    api_key_env = "GOOGLE_API_KEY"
    model_env = "GOOGLE_MODEL"
    default_model = "gemini-2.0-flash"

    def _build_model(self):
        from pydantic_ai.models.google import GoogleModel
        from pydantic_ai.providers.google import GoogleProvider

        provider = GoogleProvider(api_key=self.api_key)
        return GoogleModel(self.model_name, provider=provider)


class AnthropicCompletionProvider(PydanticAIProvider):
    name = "claude"
    api_key_env = "ANTHROPIC_API_KEY"
    model_env = "ANTHROPIC_MODEL"
    default_model = "claude-3-5-sonnet-latest"

    def _build_model(self):
        from pydantic_ai.models.anthropic import AnthropicModel
        from pydantic_ai.providers.anthropic import AnthropicProvider

        provider = AnthropicProvider(api_key=self.api_key)
        return AnthropicModel(self.model_name, provider=provider)


class OpenAICompletionProvider(PydanticAIProvider):
    name = "openai"
    api_key_env = "OPENAI_API_KEY"
    model_env = "OPENAI_MODEL"
    default_model = "gpt-4o-mini"

    def _build_model(self):
        from pydantic_ai.models.openai import OpenAIChatModel
        from pydantic_ai.providers.openai import OpenAIProvider

        provider = OpenAIProvider(api_key=self.api_key)
        return OpenAIChatModel(self.model_name, provider=provider)


PROVIDERS = {
    "google": GoogleCompletionProvider,
    "claude": AnthropicCompletionProvider,
    "anthropic": AnthropicCompletionProvider,
    "openai": OpenAICompletionProvider,
}


def create_provider(name: str) -> CompletionProvider:
    key = (name or "").strip().lower()
    provider_cls = PROVIDERS.get(key)
    if provider_cls is None:
        raise LLMProviderError(f"Unknown LLM provider: {name!r}. Expected one of {sorted(PROVIDERS)}")
    return provider_cls()


def get_configured_provider() -> Optional[CompletionProvider]:
    """
    Backend named by LLM_PROVIDER, or None when LLM enhancement is off,
    no provider is named, the key is missing, or configuration is not loaded.
    """
    try:
        config = get_config()
    except ConfigurationUnavailableError:
        return None

    if not config.llm_enabled or not config.llm_provider:
        return None

    provider = create_provider(config.llm_provider)
    if not provider.is_configured():
        logger.warning(f"LLM provider '{config.llm_provider}' selected but no API key is set")
        return None
    return provider
