# FILE: services/query_extractors.py
"""
Field extraction for the query intents.

Each extract_*_query function returns a plain dict holding only the fields
it found; the parser turns that dict into the matching intent model.
Dates are returned exactly as the user wrote them ("last week",
"January 15, 2024"). Resolving them to calendar dates is left to whoever
runs the query.
"""

import re
from typing import Any, Dict, Optional

from services.extractors import extract_amount_and_currency, extract_recipient, extract_reference
from services.patterns import ACCOUNT_TYPE_PATTERN, STATUS_VOCABULARY

_I = re.IGNORECASE

# -----------------------------
# Date helpers
# -----------------------------
# Words separated by whitespace; a run never starts or ends on whitespace
_WORDS = r"[A-Za-z0-9,]+(?:\s+[A-Za-z0-9,]+)*"

_RANGE_FROM_TO = re.compile(
    r"\b(from|since|after)\s+(" + _WORDS + r"?)\s+(to|until|before|and)\s+(" + _WORDS + r")", _I
)
_RANGE_SINCE = re.compile(r"\b(since|from|after)\s+(" + _WORDS + r")", _I)
_RANGE_BEFORE = re.compile(r"\b(before|until)\s+(" + _WORDS + r")", _I)
_RANGE_RELATIVE = re.compile(r"\b(last|past)\s+(week|month|year|30\s+days|7\s+days)", _I)

_DATE_PATTERNS = [
    re.compile(r"\b(on|at|for)\s+([A-Za-z]+\s+\d{1,2},?\s+\d{4})", _I),   # on January 15, 2024
    re.compile(r"\b(on|at|for)\s+(\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4})", _I),  # on 01/15/2024
    re.compile(r"\b(on|at|for)\s+([A-Za-z]+\s+\d{1,2})", _I),              # on January 15
    re.compile(r"\b(today|yesterday|tomorrow)\b", _I),
    re.compile(
        r"\b(last|this|next)\s+"
        r"(week|month|year|monday|tuesday|wednesday|thursday|friday|saturday|sunday)",
        _I,
    ),
]


def extract_date_range(text: str) -> Optional[Dict[str, str]]:
    m = _RANGE_FROM_TO.search(text)
    if m and m.group(2).strip() and m.group(4).strip():
        return {"start": m.group(2).strip(), "end": m.group(4).strip()}

    m = _RANGE_SINCE.search(text)
    if m and m.group(2).strip():
        return {"start": m.group(2).strip()}

    m = _RANGE_BEFORE.search(text)
    if m and m.group(2).strip():
        return {"end": m.group(2).strip()}

    m = _RANGE_RELATIVE.search(text)
    if m:
        return {"start": m.group(0)}

    return None


def extract_date(text: str) -> Optional[str]:
    """Most specific captured group of the first matching date pattern."""
    for pattern in _DATE_PATTERNS:
        m = pattern.search(text)
        if m:
            groups = [g for g in m.groups() if g]
            if len(groups) >= 2:
                return groups[1]
            if groups:
                return groups[0]
            return m.group(0)
    return None


# -----------------------------
# Shared helpers
# -----------------------------
def extract_status(text: str) -> Optional[str]:
    for status, pattern in STATUS_VOCABULARY:
        if pattern.search(text):
            return status
    return None


def _int_after(pattern: "re.Pattern[str]", text: str) -> Optional[int]:
    m = pattern.search(text)
    if not m:
        return None
    value = int(m.group(2))
    return value or None


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def _filters(**values: Any) -> Optional[Dict[str, Any]]:
    found = _compact(values)
    return found or None


# -----------------------------
# Transaction
# -----------------------------
_COUNT = re.compile(r"\b(last|latest|recent|first|oldest)\s+(\d+)", _I)


def _transaction_type(text: str) -> Optional[str]:
    lowered = text.lower()
    if re.search(r"\b(last|latest|recent)\b", lowered):
        if re.search(r"\blast\b", lowered):
            return "last"
        if re.search(r"\blatest\b", lowered):
            return "latest"
        return "recent"
    if re.search(r"\b(first|oldest)\b", lowered):
        return "first" if re.search(r"\bfirst\b", lowered) else "oldest"
    return None


def extract_transaction_query(text: str) -> Dict[str, Any]:
    amount, currency = extract_amount_and_currency(text)
    return _compact({
        "transaction_type": _transaction_type(text),
        "count": _int_after(_COUNT, text),
        "date_range": extract_date_range(text),
        "filters": _filters(
            recipient=extract_recipient(text),
            amount=amount,
            currency=currency,
        ),
    })


# -----------------------------
# Status
# -----------------------------
_TRANSACTION_ID = re.compile(
    r"\b(transaction|transfer|wire)[\s\-_]?(id|number|#|no\.?)[\s\-:]?\s*([A-Z0-9\-]{3,})", _I
)
_PAYMENT_ID = re.compile(
    r"\b(payment|pay)[\s\-_]?(id|number|#|no\.?)[\s\-:]?\s*([A-Z0-9\-]{3,})", _I
)
_LOOSE_ID = re.compile(r"\b(transaction|payment|transfer|wire)\s+([A-Z0-9\-]{3,})", _I)


def extract_status_query(text: str) -> Dict[str, Any]:
    m = _TRANSACTION_ID.search(text)
    transaction_id = m.group(3) if m else None
    m = _PAYMENT_ID.search(text)
    payment_id = m.group(3) if m else None

    if not transaction_id and not payment_id:
        m = _LOOSE_ID.search(text)
        if m and m.group(2).lower() not in ("to", "for"):
            if m.group(1).lower() == "payment":
                payment_id = m.group(2)
            else:
                transaction_id = m.group(2)

    return _compact({
        "recipient": extract_recipient(text),
        "reference": extract_reference(text),
        "transaction_id": transaction_id,
        "payment_id": payment_id,
        "date": extract_date(text),
    })


# -----------------------------
# Balance
# -----------------------------
def extract_balance_query(text: str) -> Dict[str, Any]:
    _, currency = extract_amount_and_currency(text)
    m = ACCOUNT_TYPE_PATTERN.search(text)
    return _compact({
        "currency": currency,
        "account_type": m.group(1).lower() if m else None,
    })


# -----------------------------
# History
# -----------------------------
_HISTORY_LIMIT = re.compile(r"\b(last|latest|recent)\s+(\d+)", _I)


def extract_history_query(text: str) -> Dict[str, Any]:
    amount, currency = extract_amount_and_currency(text)
    return _compact({
        "date_range": extract_date_range(text),
        "filters": _filters(
            recipient=extract_recipient(text),
            amount=amount,
            currency=currency,
            status=extract_status(text),
        ),
        "limit": _int_after(_HISTORY_LIMIT, text),
    })


# -----------------------------
# Search
# -----------------------------
_SEARCH_OBJECT = re.compile(
    r"\b(find|search|look\s+for|locate)\s+(payment|transaction|transfer|wire)\s+(to|for)\s+(.+?)(?:\s|$)",
    _I,
)


def extract_search_query(text: str) -> Dict[str, Any]:
    search_term = extract_recipient(text) or extract_reference(text)
    if not search_term:
        m = _SEARCH_OBJECT.search(text)
        if m:
            search_term = m.group(4).strip()

    amount, currency = extract_amount_and_currency(text)
    return _compact({
        "search_term": search_term or "all",
        "filters": _filters(amount=amount, currency=currency, date=extract_date(text)),
    })


# -----------------------------
# List
# -----------------------------
_ENTITY_TYPES = [
    ("recipients", re.compile(r"\b(recipients?|contacts?|person|people)\b", _I)),
    ("accounts", re.compile(r"\baccounts?\b", _I)),
    ("payments", re.compile(r"\bpayments?\b", _I)),
]
_LIST_LIMIT = re.compile(r"\b(last|latest|recent|first)\s+(\d+)", _I)


def extract_list_query(text: str) -> Dict[str, Any]:
    entity_type = "transactions"
    for name, pattern in _ENTITY_TYPES:
        if pattern.search(text):
            entity_type = name
            break

    _, currency = extract_amount_and_currency(text)
    return _compact({
        "entity_type": entity_type,
        "filters": _filters(status=extract_status(text), currency=currency, date=extract_date(text)),
        "limit": _int_after(_LIST_LIMIT, text),
    })
