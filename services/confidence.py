# FILE: services/confidence.py
from typing import List, NamedTuple, Optional

FIELD_WEIGHTS = {
    "amount": 0.25,
    "currency": 0.25,
    "recipient": 0.25,
    "destination_country": 0.25,
}
CORRIDOR_BONUS = 0.05
CLARIFICATION_THRESHOLD = 0.6


class ConfidenceResult(NamedTuple):
    confidence: float
    missing_fields: List[str]
    clarification_needed: Optional[str]


def _clarification(missing: List[str], recipient: Optional[str]) -> str:
    who = recipient or "the recipient"
    if "amount" in missing and "currency" in missing:
        return "How much would you like to send and in what currency?"
    if "amount" in missing:
        return "How much would you like to send?"
    if "currency" in missing:
        return "What currency would you like to use?"
    if "destination_country" in missing:
        return f"Where is {who} located?"
    if "recipient" in missing:
        return "Who would you like to send money to?"
    return f"How much would you like to send and where is {who} located?"


def calculate_confidence(
    amount: Optional[float],
    currency: Optional[str],
    recipient: Optional[str],
    destination_country: Optional[str],
    corridor: Optional[str],
) -> ConfidenceResult:
    """
    Score how complete a payment is.

    Each primary field is worth 0.25 and a derivable corridor adds 0.05,
    capped at 1.0. Below 0.6 exactly one clarification question is
    produced, asking for the most important missing piece first.
    """
    fields = {
        "amount": amount,
        "currency": currency,
        "recipient": recipient,
        "destination_country": destination_country,
    }

    score = 0.0
    missing: List[str] = []
    for name, weight in FIELD_WEIGHTS.items():
        if fields[name] is None:
            missing.append(name)
        else:
            score += weight

    if corridor is not None:
        score += CORRIDOR_BONUS

    score = round(min(score, 1.0), 2)

    clarification = None
    if score < CLARIFICATION_THRESHOLD:
        clarification = _clarification(missing, recipient)

    return ConfidenceResult(score, missing, clarification)
