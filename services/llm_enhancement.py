# FILE: services/llm_enhancement.py
"""
Confidence-gated enhancement of a heuristically parsed intent.

When the rule-based result is weak, a text-completion backend is asked to
return the intent as JSON. Its answer is shallow-merged over the original
record (model fields win) and confidence is bumped by 0.2, capped at 0.95.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from agents.completion_provider import CompletionOptions, CompletionProvider, get_configured_provider
from config import get_config
from core.errors import ConfigurationUnavailableError, LLMProviderError, LLMResponseUnparsableError
from core.intent import IntentType
from models.intent import BaseIntent, merge_intent
from services.prompts import (
    INTENT_PARSING_SYSTEM_PROMPT,
    missing_fields_prompt,
    payment_intent_prompt,
    query_intent_prompt,
)

# -----------------------------
# Logging Setup
# -----------------------------
logger = logging.getLogger("llm_enhancement")
logger.setLevel(logging.INFO)
if not logger.handlers:
    sh = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    sh.setFormatter(formatter)
    logger.addHandler(sh)

CONFIDENCE_BOOST = 0.2
MAX_ENHANCED_CONFIDENCE = 0.95

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")


class LLMSettings(BaseModel):
    enabled: bool = False
    confidence_threshold: float = 0.6
    temperature: float = 0.3
    max_tokens: int = 500
    use_fallback: bool = True


def load_llm_settings() -> LLMSettings:
    try:
        config = get_config()
    except ConfigurationUnavailableError:
        return LLMSettings()
    return LLMSettings(
        enabled=config.llm_enabled,
        confidence_threshold=config.llm_confidence_threshold,
        temperature=config.llm_temperature,
        max_tokens=config.llm_max_tokens,
        use_fallback=config.llm_use_fallback,
    )


def parse_json_reply(reply: str) -> Dict[str, Any]:
    """Strip optional ```json fences and decode a JSON object."""
    text = _FENCE_OPEN.sub("", reply.strip())
    text = _FENCE_CLOSE.sub("", text).strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LLMResponseUnparsableError(f"Completion is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise LLMResponseUnparsableError(f"Expected a JSON object, got {type(data).__name__}")
    return data


class LLMEnhancementService:
    def __init__(
        self,
        provider: Optional[CompletionProvider] = None,
        settings: Optional[LLMSettings] = None,
    ):
        # Both resolved lazily from configuration when not injected
        self._provider = provider
        self._settings = settings

    @property
    def settings(self) -> LLMSettings:
        return self._settings if self._settings is not None else load_llm_settings()

    @property
    def provider(self) -> Optional[CompletionProvider]:
        if self._provider is not None:
            return self._provider
        return get_configured_provider()

    def is_available(self) -> bool:
        if not self.settings.enabled:
            return False
        provider = self.provider
        return provider is not None and provider.is_configured()

    async def _complete(self, prompt: str) -> Dict[str, Any]:
        settings = self.settings
        options = CompletionOptions(
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            system_prompt=INTENT_PARSING_SYSTEM_PROMPT,
        )
        reply = await self.provider.call(prompt, options)
        return parse_json_reply(reply)

    async def enhance_intent(
        self,
        text: str,
        intent: BaseIntent,
        confidence: float,
    ) -> Optional[BaseIntent]:
        """
        Returns the enhanced intent, or None when enhancement did not run or
        produced nothing usable. Provider failures propagate only when the
        fallback is disabled.
        """
        settings = self.settings
        if confidence >= settings.confidence_threshold:
            return None
        if not self.is_available():
            return None

        current = intent.to_payload()
        if IntentType(intent.type).is_payment():
            prompt = payment_intent_prompt(text, current)
        else:
            prompt = query_intent_prompt(text, intent.type, current)

        try:
            patch = await self._complete(prompt)
        except LLMProviderError as e:
            if settings.use_fallback:
                logger.warning(f"LLM enhancement failed, using original intent: {e}")
                return None
            raise
        except LLMResponseUnparsableError as e:
            logger.warning(f"Failed to parse LLM JSON response: {e}")
            return None

        boosted = round(min(MAX_ENHANCED_CONFIDENCE, intent.confidence + CONFIDENCE_BOOST), 2)
        try:
            enhanced = merge_intent(intent, patch, confidence=boosted)
        except LLMResponseUnparsableError as e:
            logger.warning(f"LLM reply did not fit the {intent.type} shape: {e}")
            return None

        logger.info(f"Enhanced {intent.type} intent: confidence {intent.confidence} -> {enhanced.confidence}")
        return enhanced

    async def fill_missing_fields(
        self,
        text: str,
        intent: BaseIntent,
        missing_fields: List[str],
    ) -> Optional[BaseIntent]:
        """Same merge as enhance_intent, scoped to named fields; confidence unchanged."""
        if not missing_fields or not self.is_available():
            return None

        prompt = missing_fields_prompt(text, intent.to_payload(), missing_fields)
        try:
            patch = await self._complete(prompt)
            return merge_intent(intent, patch)
        except (LLMProviderError, LLMResponseUnparsableError) as e:
            logger.warning(f"Failed to fill missing fields {missing_fields}: {e}")
            return None
