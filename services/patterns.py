# FILE: services/patterns.py
"""
Static lexical tables shared by the extractors and the classifier.
Everything here is compiled once at import time and never mutated.
"""

import re

_I = re.IGNORECASE

# -----------------------------
# Currencies
# -----------------------------
# Keyword pre-pass, checked in this order; first hit wins
CURRENCY_PATTERNS = [
    ("USD", re.compile(r"\$|\b(?:usd|us\s+dollars?|dollars?|bucks)\b", _I)),
    ("EUR", re.compile(r"€|\b(?:eur|euros?)\b", _I)),
    ("USDC", re.compile(r"\b(?:usdc|usd\s+coin)\b", _I)),
    ("GBP", re.compile(r"£|\b(?:gbp|pounds?|sterling)\b", _I)),
    ("PHP", re.compile(r"₱|\b(?:php|pesos?)\b", _I)),
    ("MAD", re.compile(r"\b(?:mad|dirhams?)\b", _I)),
    ("NGN", re.compile(r"₦|\b(?:ngn|naira)\b", _I)),
]

_NUMBER = r"(\d+(?:[,\s]\d{3})*(?:\.\d{2})?)"

# One amount-with-unit pattern per currency family, in this order.
# Only the first match of each pattern is considered.
AMOUNT_PATTERNS = [
    re.compile(r"\$?\s*" + _NUMBER + r"\s*(?:usd|dollar|dollars)?", _I),
    re.compile(_NUMBER + r"\s*(?:eur|euro|euros|€)", _I),
    re.compile(_NUMBER + r"\s*(?:usdc|usd coin)", _I),
    re.compile(_NUMBER + r"\s*(?:gbp|pound|pounds|£)", _I),
    re.compile(_NUMBER + r"\s*(?:php|peso|pesos)", _I),
    re.compile(_NUMBER + r"\s*(?:mad|dirham|dirhams)", _I),
    re.compile(_NUMBER + r"\s*(?:ngn|naira)", _I),
]

BARE_NUMBER_PATTERN = re.compile(r"\b" + _NUMBER + r"\b")

# Matched span -> currency. Order matters: "usdc" contains "usd".
SPAN_CURRENCY_HINTS = [
    (("$", "dollar"), "USD"),
    (("€", "euro"), "EUR"),
    (("£", "pound"), "GBP"),
    (("usdc",), "USDC"),
]

# -----------------------------
# Recipients
# -----------------------------
VENDOR_ID_PATTERN = re.compile(r"\b(vendor_id|vendor)[\s\-:]?\s*([A-Z0-9\-:]+)", _I)

RELATIONSHIP_KEYWORDS = re.compile(
    r"\b(my\s+)?(sister|brother|mother|father|mom|dad|parent|parents|friend|friends|"
    r"contractor|contractors|vendor|vendors|employee|employees|colleague|colleagues|"
    r"client|clients|customer|customers|partner|partners|associate|associates|"
    r"relative|relatives|family|families)\b",
    _I,
)

# Case-sensitive on purpose: the name must be capitalized
TO_NAME_PATTERN = re.compile(r"\b(?:to|for)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)")
CAPITALIZED_NAME_PATTERN = re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)")
TO_ANY_WORD_PATTERN = re.compile(r"\b(?:to|for)\s+(\w+)", _I)

NAME_DENYLIST = frozenset(
    {"Send", "Pay", "Transfer", "Wire", "Give", "Manila", "Morocco", "Nigeria", "Philippines"}
)

# -----------------------------
# Locations
# -----------------------------
LOCATION_PATTERN = re.compile(r"\b(?:in|to|at|from)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)")
WORD_PATTERN = re.compile(r"\w+")

LOCATION_STOPWORDS = frozenset(
    {"send", "for", "the", "a", "an", "to", "in", "at", "from", "my", "his", "her", "their"}
)

# Upper-case words that collide with alpha-2 codes ("pay ID 4421", "SEND IT NOW")
CODE_LIKE_WORDS = frozenset({"ID", "IT", "IS", "ME", "NO", "DO", "BE", "BY", "SO", "AM"})

# -----------------------------
# Urgency
# -----------------------------
HIGH_URGENCY_PATTERN = re.compile(
    r"\b(urgent|asap|as soon as possible|immediately|right now|now|emergency|critical)\b", _I
)

# -----------------------------
# References
# -----------------------------
REFERENCE_PATTERNS = [
    re.compile(r"\b(invoice|inv)[\s\-:]?\s*([A-Z0-9\-]+)", _I),
    re.compile(r"\b(reference|ref)[\s\-:]?\s*([A-Z0-9\-]+)", _I),
    re.compile(r"\b(identifier|id)[\s\-:]?\s*([A-Z0-9\-]+)", _I),
    re.compile(r"\b(vendor_id|vendor)[\s\-:]?\s*([A-Z0-9\-:]+)", _I),
]

# -----------------------------
# Query vocabulary
# -----------------------------
STATUS_VOCABULARY = [
    ("pending", re.compile(r"\b(pending|processing|in\s+progress)\b", _I)),
    ("completed", re.compile(r"\b(completed|done|finished|successful|success)\b", _I)),
    ("failed", re.compile(r"\b(failed|error|unsuccessful)\b", _I)),
]

ACCOUNT_TYPE_PATTERN = re.compile(r"\b(savings|checking|current|business|personal)\s+account", _I)
