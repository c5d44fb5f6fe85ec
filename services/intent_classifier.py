# FILE: services/intent_classifier.py
"""
Rule-based intent classification.

The table below is scanned in descending priority; the first bucket with a
matching pattern decides the type. Query buckets sit above the broad
payment catch-alls, so "show my last payment" is a transaction query.
"""

import re
from typing import List, NamedTuple, Pattern

from core.intent import IntentType

_I = re.IGNORECASE

_VERB_SHOW = r"(show|display|get|fetch|retrieve|see|view|tell\s+me|give\s+me)"
_MONEY_MOVE = r"(payment|transaction|transfer|wire|pay)"
_MONEY_MOVE_STRICT = r"(payment|transaction|transfer|wire)"


class IntentRule(NamedTuple):
    type: IntentType
    priority: int
    patterns: List[Pattern[str]]


def _compile(*patterns: str) -> List[Pattern[str]]:
    return [re.compile(p, _I) for p in patterns]


INTENT_RULES: List[IntentRule] = [
    IntentRule(IntentType.QUERY_STATUS, 10, _compile(
        r"\b(did|has|have|is|was|were)\s+(my\s+)?" + _MONEY_MOVE + r"\s+(to|for)\s+",
        r"\b(status|state|condition)\s+(of|for)\s+(my\s+)?" + _MONEY_MOVE,
        r"\b(is|was|has|have)\s+(my\s+)?" + _MONEY_MOVE + r"\s+(to|for)\s+.*\s+"
        r"(done|complete|completed|finished|processed|successful|failed|pending|approved|rejected)",
        r"\b(did|has|have)\s+(my\s+)?" + _MONEY_MOVE + r"\s+(to|for)\s+.*\s+"
        r"(go\s+through|succeed|fail|complete|finish|work|process)",
        r"\b(check|verify|confirm|tell\s+me)\s+(the\s+)?(status|state)\s+(of|for)\s+(my\s+)?" + _MONEY_MOVE_STRICT,
        r"\b(what|what's|what is)\s+(the\s+)?(status|state)\s+(of|for)\s+(my\s+)?" + _MONEY_MOVE_STRICT,
        r"\b(is|was)\s+.*\s+" + _MONEY_MOVE_STRICT + r"\s+(to|for)\s+.*\s+"
        r"(done|complete|completed|finished|processed|successful|failed)",
        r"\b(did|has|have)\s+.*\s+" + _MONEY_MOVE_STRICT + r"\s+(to|for)\s+.*\s+"
        r"(succeed|fail|complete|finish|go\s+through)",
        r"\b" + _MONEY_MOVE_STRICT + r"\s+(to|for)\s+.*\s+(status|state|condition)",
        r"\b(is|was)\s+.*\s+" + _MONEY_MOVE_STRICT + r"\s+(to|for)\s+.*\s+"
        r"(successful|failed|pending|approved|rejected)",
    )),
    IntentRule(IntentType.QUERY_TRANSACTION, 9, _compile(
        r"\b" + _VERB_SHOW + r"\s+(me\s+)?(my\s+)?"
        r"(last|latest|recent|first|oldest|previous|most\s+recent)\s+" + _MONEY_MOVE,
        r"\b" + _VERB_SHOW + r"\s+(me\s+)?(my\s+)?" + _MONEY_MOVE
        + r"\s+(last|latest|recent|first|oldest|previous|most\s+recent)",
        r"\b(what|what's|what is)\s+(my\s+)?"
        r"(last|latest|recent|first|oldest|previous|most\s+recent)\s+" + _MONEY_MOVE,
        r"\b" + _VERB_SHOW + r"\s+(me\s+)?(the\s+)?(last|latest|recent|first|oldest)\s+\d+\s+"
        + _MONEY_MOVE_STRICT,
        r"\b" + _VERB_SHOW + r"\s+(me\s+)?(my\s+)?" + _MONEY_MOVE_STRICT + r"\s+(from|on|in)\s+",
        r"\b(last|latest|recent|first|oldest)\s+" + _MONEY_MOVE_STRICT,
        r"\b(show|display|get|fetch|retrieve|see|view)\s+(me\s+)?(my\s+)?(most\s+recent|previous)\s+"
        + _MONEY_MOVE_STRICT,
    )),
    IntentRule(IntentType.QUERY_BALANCE, 8, _compile(
        r"\b(show|display|get|fetch|retrieve|see|view|what|what's|what is)\s+(me\s+)?(my\s+)?"
        r"(balance|account\s+balance|available\s+balance)",
        r"\b(how\s+much)\s+(do\s+i\s+have|is\s+in\s+my\s+account|is\s+available)",
        r"\b(what|what's|what is)\s+(my\s+)?(current\s+)?(balance|account\s+balance)",
        r"\b(check|see|view)\s+(my\s+)?(balance|account\s+balance)",
    )),
    IntentRule(IntentType.QUERY_HISTORY, 7, _compile(
        r"\b" + _VERB_SHOW + r"\s+(me\s+)?(my\s+)?" + _MONEY_MOVE
        + r"\s+(history|record|records|log|logs|activity)",
        r"\b" + _VERB_SHOW + r"\s+(me\s+)?(my\s+)?(history|record|records|log|logs|activity)\s+(of\s+)?"
        + _MONEY_MOVE,
        r"\b(what|what's|what is)\s+(my\s+)?" + _MONEY_MOVE
        + r"\s+(history|record|records|log|logs|activity)",
        r"\b" + _VERB_SHOW + r"\s+(me\s+)?" + _MONEY_MOVE + r"\s+(from|since|between|after|before)\s+",
        r"\b" + _MONEY_MOVE_STRICT + r"\s+(history|record|records|log|logs|activity)",
        r"\b(past|previous|old)\s+" + _MONEY_MOVE_STRICT,
    )),
    IntentRule(IntentType.QUERY_SEARCH, 6, _compile(
        r"\b(find|search|look\s+for|locate|find\s+me)\s+(my\s+)?" + _MONEY_MOVE + r"\s+(to|for)\s+",
        r"\b(find|search|look\s+for|locate|find\s+me)\s+" + _MONEY_MOVE + r"\s+(to|for)\s+",
        r"\b(search|find|look\s+for|locate)\s+(for\s+)?" + _MONEY_MOVE + r"\s+",
        r"\b" + _VERB_SHOW + r"\s+" + _MONEY_MOVE + r"\s+(to|for)\s+",
        r"\b(find|search|look\s+for|locate)\s+.*\s+" + _MONEY_MOVE + r"\s+(to|for)\s+",
    )),
    IntentRule(IntentType.QUERY_LIST, 6, _compile(
        r"\b(list|show|display|get|fetch|retrieve|see|view|tell\s+me|give\s+me)\s+(me\s+)?(all\s+)?(my\s+)?"
        r"(transactions|payments|transfers|wires|pays)",
        r"\b(list|show|display|get|fetch|retrieve|see|view|tell\s+me|give\s+me)\s+(me\s+)?(my\s+)?"
        r"(recipients|contacts|accounts|people)",
        r"\b(what|what's|what are)\s+(my\s+)?(transactions|payments|transfers|wires|pays)",
        r"\b" + _VERB_SHOW + r"\s+(me\s+)?"
        r"(pending|completed|failed|successful|unsuccessful|processing)\s+(transactions|payments|transfers|wires)",
        r"\b(all|every)\s+(my\s+)?(transactions|payments|transfers|wires)",
        r"\b(list|show|display|get|fetch|retrieve|see|view)\s+(me\s+)?(my\s+)?"
        r"(transactions|payments|transfers|wires)\s+(list|all)",
    )),
    IntentRule(IntentType.PAYMENT, 1, _compile(
        r"\b(send|pay|transfer|wire|give|forward|dispatch|remit|send\s+money|pay\s+money)\s+",
        r"\b(make|execute|process|initiate|create|do)\s+(a\s+)?(payment|transfer|wire|pay)",
        r"\b(need\s+to\s+)?(send|pay|transfer|wire|give)\s+",
        r"\b(want\s+to\s+)?(send|pay|transfer|wire|give)\s+",
    )),
]

# Stable sort: equal priorities keep table order (search before list)
_RULES_BY_PRIORITY = sorted(INTENT_RULES, key=lambda r: r.priority, reverse=True)


def classify_intent(text: str) -> IntentType:
    normalized = text.strip().lower()
    for rule in _RULES_BY_PRIORITY:
        if any(p.search(normalized) for p in rule.patterns):
            return rule.type
    return IntentType.PAYMENT


def classification_confidence(text: str, intent_type: IntentType) -> float:
    """0.7 plus 0.1 per matching pattern of `intent_type`, capped at 0.95."""
    if intent_type is IntentType.UNKNOWN:
        return 0.1

    rule = next((r for r in INTENT_RULES if r.type is intent_type), None)
    if rule is None:
        return 0.5

    matches = sum(1 for p in rule.patterns if p.search(text))
    if matches:
        return round(min(0.95, 0.7 + matches * 0.1), 2)
    return 0.7
