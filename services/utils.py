# FILE: services/utils.py
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from models.intent import BaseIntent

LEGACY_PAYMENT_FIELDS = ("amount", "currency", "recipient", "destination_country", "corridor")


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-15T10:30:00.123Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def legacy_payment_payload(intent: BaseIntent) -> Dict[str, Any]:
    """
    The payment-only record older clients expect.
    Non-payment intents collapse to an all-null payment keeping their confidence.
    """
    if intent.type != "payment":
        payload = {name: None for name in LEGACY_PAYMENT_FIELDS}
        payload["urgency"] = "standard"
        payload["confidence"] = intent.confidence
        return payload

    payload = intent.to_payload()
    payload.pop("type", None)
    payload.pop("raw_input", None)
    return payload


def success_envelope(
    intent: BaseIntent, raw_input: Optional[str] = None, legacy: bool = False
) -> Dict[str, Any]:
    """`raw_input` echoes the caller's text as sent; defaults to the normalized input."""
    return {
        "success": True,
        "intent": legacy_payment_payload(intent) if legacy else intent.to_payload(),
        "raw_input": intent.raw_input if raw_input is None else raw_input,
        "parsed_at": utc_timestamp(),
    }


def error_envelope(error: str, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "error": error}
    if message:
        body["message"] = message
    return body
