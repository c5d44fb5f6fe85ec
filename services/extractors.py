# FILE: services/extractors.py
"""
Deterministic field extractors for the payment path.

Every function here is pure over its input string. The only outside
read is the loaded configuration, and each extractor falls back to a
hardcoded default when configuration is unavailable.
"""

import math
from typing import NamedTuple, Optional

from config import get_config
from core.errors import ConfigurationUnavailableError
from services.countries import COUNTRY_NAMES, country_code_for_name
from services.patterns import (
    AMOUNT_PATTERNS,
    BARE_NUMBER_PATTERN,
    CAPITALIZED_NAME_PATTERN,
    CODE_LIKE_WORDS,
    CURRENCY_PATTERNS,
    HIGH_URGENCY_PATTERN,
    LOCATION_PATTERN,
    LOCATION_STOPWORDS,
    NAME_DENYLIST,
    REFERENCE_PATTERNS,
    RELATIONSHIP_KEYWORDS,
    SPAN_CURRENCY_HINTS,
    TO_ANY_WORD_PATTERN,
    TO_NAME_PATTERN,
    VENDOR_ID_PATTERN,
    WORD_PATTERN,
)

FALLBACK_CURRENCY = "USD"
FALLBACK_URGENCY = "standard"


class AmountCurrency(NamedTuple):
    amount: Optional[float]
    currency: Optional[str]


# -----------------------------
# Amount & currency
# -----------------------------
def _parse_number(raw: str) -> Optional[float]:
    cleaned = raw.replace(",", "").replace(" ", "").strip()
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def _currency_from_keywords(text: str) -> Optional[str]:
    for code, pattern in CURRENCY_PATTERNS:
        if pattern.search(text):
            return code
    return None


def _currency_from_span(span: str) -> Optional[str]:
    span = span.lower()
    for hints, code in SPAN_CURRENCY_HINTS:
        if any(h in span for h in hints):
            return code
    return None


def _default_currency() -> str:
    try:
        return get_config().default_currency
    except ConfigurationUnavailableError:
        return FALLBACK_CURRENCY


def extract_amount_and_currency(text: str) -> AmountCurrency:
    """
    Find the payment amount and its currency.

    Unit-qualified amounts win over bare numbers; among unit-qualified
    matches the largest value wins (an earlier pattern keeps ties).
    """
    currency = _currency_from_keywords(text)

    amount: Optional[float] = None
    span_currency: Optional[str] = None

    for pattern in AMOUNT_PATTERNS:
        m = pattern.search(text)
        if not m:
            continue
        value = _parse_number(m.group(1))
        if value is None:
            continue
        if amount is None or value > amount:
            amount = value
            span_currency = _currency_from_span(m.group(0))

    if amount is None:
        values = [_parse_number(m.group(1)) for m in BARE_NUMBER_PATTERN.finditer(text)]
        values = [v for v in values if v is not None]
        if values:
            amount = max(values)

    currency = currency or span_currency
    if amount is not None and currency is None:
        currency = FALLBACK_CURRENCY if "$" in text else _default_currency()

    return AmountCurrency(amount, currency)


# -----------------------------
# Recipient
# -----------------------------
def extract_recipient(text: str) -> Optional[str]:
    m = VENDOR_ID_PATTERN.search(text)
    if m:
        return m.group(2)

    m = RELATIONSHIP_KEYWORDS.search(text)
    if m:
        return m.group(0).strip()

    m = TO_NAME_PATTERN.search(text)
    if m:
        return m.group(1)

    for m in CAPITALIZED_NAME_PATTERN.finditer(text):
        name = m.group(1)
        if name not in NAME_DENYLIST:
            return name

    m = TO_ANY_WORD_PATTERN.search(text)
    if m:
        return m.group(1)

    return None


# -----------------------------
# Destination country
# -----------------------------
def _lookup_token(token: str) -> Optional[str]:
    if token in CODE_LIKE_WORDS:
        return None
    # A bare two-letter code only counts when written in upper case ("PH", not "ph")
    if len(token) == 2 and not token.isupper():
        return COUNTRY_NAMES.get(token.lower())
    return country_code_for_name(token)


def extract_destination_country(text: str) -> Optional[str]:
    """
    Resolve the destination to an alpha-2 code.

    First tries capitalized places after in/to/at/from, then scans the
    words in order, trying each word alone and as the start of a two- and
    three-word name ("south africa", "united arab emirates").
    """
    for m in LOCATION_PATTERN.finditer(text):
        code = country_code_for_name(m.group(1))
        if code:
            return code

    words = [w.group(0) for w in WORD_PATTERN.finditer(text)]
    for i, word in enumerate(words):
        if word.lower() in LOCATION_STOPWORDS or len(word) < 2:
            continue

        code = _lookup_token(word)
        if code:
            return code

        for size in (2, 3):
            window = words[i:i + size]
            if len(window) < size:
                break
            code = country_code_for_name(" ".join(window))
            if code:
                return code

    return None


# -----------------------------
# Urgency
# -----------------------------
def extract_urgency(text: str) -> str:
    if HIGH_URGENCY_PATTERN.search(text):
        return "high"
    try:
        return get_config().default_urgency
    except ConfigurationUnavailableError:
        return FALLBACK_URGENCY


# -----------------------------
# Reference
# -----------------------------
def extract_reference(text: str) -> Optional[str]:
    for pattern in REFERENCE_PATTERNS:
        m = pattern.search(text)
        if m:
            return m.group(2)
    return None
