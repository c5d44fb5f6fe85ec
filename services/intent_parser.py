# FILE: services/intent_parser.py
"""
Parse entry points.

parse_intent: classify the text, run the matching extractors and build
an immutable intent. Pure and synchronous.

parse_intent_enhanced: the same, followed by at most one LLM enhancement
when the rule-based confidence is below the configured threshold.
"""

import logging
from typing import Callable, Dict, Optional

from config import get_config
from core.errors import ConfigurationUnavailableError, EmptyInputError, InputTooLongError
from core.intent import IntentType
from models.intent import (
    BaseIntent,
    PaymentIntent,
    QueryBalanceIntent,
    QueryHistoryIntent,
    QueryListIntent,
    QuerySearchIntent,
    QueryStatusIntent,
    QueryTransactionIntent,
)
from services.confidence import CLARIFICATION_THRESHOLD, calculate_confidence
from services.countries import corridor_for
from services.extractors import (
    extract_amount_and_currency,
    extract_destination_country,
    extract_recipient,
    extract_reference,
    extract_urgency,
)
from services.intent_classifier import classification_confidence, classify_intent
from services.llm_enhancement import LLMEnhancementService
from services.query_extractors import (
    extract_balance_query,
    extract_history_query,
    extract_list_query,
    extract_search_query,
    extract_status_query,
    extract_transaction_query,
)

# -----------------------------
# Logging Setup
# -----------------------------
logger = logging.getLogger("intent_parser")
logger.setLevel(logging.INFO)
if not logger.handlers:
    sh = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    sh.setFormatter(formatter)
    logger.addHandler(sh)

FALLBACK_MAX_INPUT_LENGTH = 1000
QUERY_CONFIDENCE_CAP = 0.95


def _max_input_length() -> int:
    try:
        return get_config().max_input_length
    except ConfigurationUnavailableError:
        return FALLBACK_MAX_INPUT_LENGTH


def _normalize(text: str) -> str:
    normalized = (text or "").strip()
    if not normalized:
        raise EmptyInputError()

    max_length = _max_input_length()
    if len(normalized) > max_length:
        raise InputTooLongError(len(normalized), max_length)
    return normalized


# -----------------------------
# Per-type builders
# -----------------------------
def _build_payment(text: str, base_confidence: float) -> PaymentIntent:
    amount, currency = extract_amount_and_currency(text)
    recipient = extract_recipient(text)
    destination_country = extract_destination_country(text)
    corridor = corridor_for(currency, destination_country)

    scored = calculate_confidence(amount, currency, recipient, destination_country, corridor)

    # When a clarification is needed the field score stands on its own so the
    # question, the missing fields and the confidence agree.
    if scored.confidence >= CLARIFICATION_THRESHOLD:
        confidence = max(base_confidence, scored.confidence)
    else:
        confidence = scored.confidence

    return PaymentIntent(
        confidence=confidence,
        raw_input=text,
        amount=amount,
        currency=currency,
        recipient=recipient,
        destination_country=destination_country,
        corridor=corridor,
        urgency=extract_urgency(text),
        reference=extract_reference(text),
        missing_fields=scored.missing_fields,
        clarification_needed=scored.clarification_needed,
    )


def _build_transaction(text: str, base_confidence: float) -> QueryTransactionIntent:
    return QueryTransactionIntent(confidence=base_confidence, raw_input=text, **extract_transaction_query(text))


def _build_status(text: str, base_confidence: float) -> QueryStatusIntent:
    fields = extract_status_query(text)
    confidence = base_confidence
    if any(fields.get(k) for k in ("recipient", "reference", "transaction_id", "payment_id")):
        confidence = round(min(QUERY_CONFIDENCE_CAP, base_confidence + 0.2), 2)
    return QueryStatusIntent(confidence=confidence, raw_input=text, **fields)


def _build_balance(text: str, base_confidence: float) -> QueryBalanceIntent:
    return QueryBalanceIntent(confidence=base_confidence, raw_input=text, **extract_balance_query(text))


def _build_history(text: str, base_confidence: float) -> QueryHistoryIntent:
    return QueryHistoryIntent(confidence=base_confidence, raw_input=text, **extract_history_query(text))


def _build_search(text: str, base_confidence: float) -> QuerySearchIntent:
    fields = extract_search_query(text)
    confidence = base_confidence
    if fields["search_term"] != "all":
        confidence = round(min(QUERY_CONFIDENCE_CAP, base_confidence + 0.15), 2)
    return QuerySearchIntent(confidence=confidence, raw_input=text, **fields)


def _build_list(text: str, base_confidence: float) -> QueryListIntent:
    return QueryListIntent(confidence=base_confidence, raw_input=text, **extract_list_query(text))


BUILDERS: Dict[IntentType, Callable[[str, float], BaseIntent]] = {
    IntentType.PAYMENT: _build_payment,
    IntentType.QUERY_TRANSACTION: _build_transaction,
    IntentType.QUERY_STATUS: _build_status,
    IntentType.QUERY_BALANCE: _build_balance,
    IntentType.QUERY_HISTORY: _build_history,
    IntentType.QUERY_SEARCH: _build_search,
    IntentType.QUERY_LIST: _build_list,
}


# -----------------------------
# Entry points
# -----------------------------
def parse_intent(text: str) -> BaseIntent:
    """
    Parse one utterance into an intent.

    Raises EmptyInputError for blank input and InputTooLongError when the
    trimmed input exceeds the configured maximum.
    """
    normalized = _normalize(text)

    intent_type = classify_intent(normalized)
    base_confidence = classification_confidence(normalized, intent_type)

    builder = BUILDERS.get(intent_type)
    if builder is None:
        # Unreachable with the current table; treat like a low-signal payment
        intent = _build_payment(normalized, 0.5)
    else:
        intent = builder(normalized, base_confidence)

    logger.debug(f"Parsed {intent.type} (confidence={intent.confidence}): {normalized!r}")
    return intent


async def parse_intent_enhanced(
    text: str,
    enhancer: Optional[LLMEnhancementService] = None,
) -> BaseIntent:
    """
    parse_intent, then at most one enhancement call. Falls back to the
    rule-based intent whenever enhancement declines or fails softly.
    """
    intent = parse_intent(text)

    service = enhancer or LLMEnhancementService()
    enhanced = await service.enhance_intent(intent.raw_input, intent, intent.confidence)
    if enhanced is not None:
        return enhanced
    return intent
