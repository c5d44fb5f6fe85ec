"""
Command-line wrapper around the intent parser.

Usage:
  python main.py "send $500 to John in Manila"
  python main.py --json "pay my sister 200 euros"
  echo "send money" | python main.py
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from config import load_config
from core.errors import ConfigurationUnavailableError, IntentParserError
from core.intent import INTENT_LABELS, IntentType
from models.intent import BaseIntent
from services.intent_parser import parse_intent, parse_intent_enhanced
from services.utils import success_envelope

NOT_SPECIFIED = "(not specified)"


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


# -----------------------------
# Human-readable rendering
# -----------------------------
def _payment_lines(p: dict) -> List[str]:
    amount = NOT_SPECIFIED
    if p["amount"] is not None:
        amount = f"{_number(p['amount'])} {p['currency'] or ''}".rstrip()
    lines = [
        f"💰 Amount: {amount}",
        f"💵 Currency: {p['currency'] or NOT_SPECIFIED}",
        f"👤 Recipient: {p['recipient'] or NOT_SPECIFIED}",
        f"🌍 Destination: {p['destination_country'] or NOT_SPECIFIED}",
        f"🔄 Corridor: {p['corridor'] or NOT_SPECIFIED}",
        f"⚡ Urgency: {p['urgency']}",
    ]
    if p.get("reference"):
        lines.append(f"📄 Reference: {p['reference']}")
    if p.get("missing_fields"):
        lines.append("")
        lines.append(f"⚠️  Missing Fields: {', '.join(p['missing_fields'])}")
    if p.get("clarification_needed"):
        lines.append("")
        lines.append(f"❓ {p['clarification_needed']}")
    return lines


def _date_range_lines(p: dict) -> List[str]:
    lines = []
    date_range = p.get("date_range") or {}
    if date_range.get("start"):
        lines.append(f"📆 Start Date: {date_range['start']}")
    if date_range.get("end"):
        lines.append(f"📆 End Date: {date_range['end']}")
    return lines


def _filter_lines(filters: Optional[dict], title: str = "🔍 Filters:") -> List[str]:
    if not filters:
        return []
    labels = [
        ("recipient", "👤 Recipient"),
        ("amount", "💰 Amount"),
        ("currency", "💵 Currency"),
        ("status", "📊 Status"),
        ("date", "📆 Date"),
    ]
    lines = ["", title]
    for key, label in labels:
        if filters.get(key) is not None:
            value = filters[key]
            if isinstance(value, float):
                value = _number(value)
            lines.append(f"  {label}: {value}")
    return lines


def _transaction_lines(p: dict) -> List[str]:
    lines = []
    if p.get("transaction_type"):
        lines.append(f"📅 Transaction Type: {p['transaction_type']}")
    if p.get("count"):
        lines.append(f"🔢 Count: {p['count']}")
    return lines + _date_range_lines(p) + _filter_lines(p.get("filters"))


def _status_lines(p: dict) -> List[str]:
    labels = [
        ("recipient", "👤 Recipient"),
        ("reference", "📄 Reference"),
        ("transaction_id", "🆔 Transaction ID"),
        ("payment_id", "💳 Payment ID"),
        ("date", "📆 Date"),
    ]
    lines = [f"{label}: {p[key]}" for key, label in labels if p.get(key)]
    if not any(p.get(k) for k in ("recipient", "reference", "transaction_id", "payment_id")):
        lines.append("⚠️  No specific identifier found")
    return lines


def _balance_lines(p: dict) -> List[str]:
    lines = []
    if p.get("currency"):
        lines.append(f"💵 Currency: {p['currency']}")
    if p.get("account_type"):
        lines.append(f"🏦 Account Type: {p['account_type']}")
    return lines


def _history_lines(p: dict) -> List[str]:
    lines = _date_range_lines(p)
    if p.get("limit"):
        lines.append(f"🔢 Limit: {p['limit']}")
    return lines + _filter_lines(p.get("filters"))


def _search_lines(p: dict) -> List[str]:
    return [f"🔍 Search Term: {p['search_term']}"] + _filter_lines(p.get("filters"), "🔍 Additional Filters:")


def _list_lines(p: dict) -> List[str]:
    lines = [f"📋 Entity Type: {p['entity_type']}"]
    if p.get("limit"):
        lines.append(f"🔢 Limit: {p['limit']}")
    return lines + _filter_lines(p.get("filters"))


RENDERERS = {
    IntentType.PAYMENT: _payment_lines,
    IntentType.QUERY_TRANSACTION: _transaction_lines,
    IntentType.QUERY_STATUS: _status_lines,
    IntentType.QUERY_BALANCE: _balance_lines,
    IntentType.QUERY_HISTORY: _history_lines,
    IntentType.QUERY_SEARCH: _search_lines,
    IntentType.QUERY_LIST: _list_lines,
}


def format_intent(intent: BaseIntent) -> str:
    intent_type = IntentType(intent.type)
    payload = intent.to_payload()

    lines = [
        "",
        f"📋 Parsed {INTENT_LABELS.get(intent_type, 'Intent')}",
        "",
        f'Input: "{intent.raw_input}"',
        "",
        f"🎯 Intent Type: {intent.type}",
        f"📊 Confidence: {intent.confidence * 100:.0f}%",
        "",
    ]
    renderer = RENDERERS.get(intent_type)
    lines += renderer(payload) if renderer else ["⚠️  Unknown intent type"]
    lines.append("")
    return "\n".join(lines)


# -----------------------------
# Entrypoint
# -----------------------------
def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intent-parser",
        description="Parse a natural-language payment request or query into a structured intent.",
    )
    parser.add_argument("text", nargs="*", help="Text to parse (read from stdin when omitted)")
    parser.add_argument("-j", "--json", action="store_true", help="Output the JSON envelope")
    parser.add_argument(
        "--enhance", action="store_true",
        help="Allow the configured LLM to improve low-confidence results",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        load_config()
    except ConfigurationUnavailableError:
        print("Warning: Could not load config, using defaults", file=sys.stderr)

    text = " ".join(args.text) if args.text else ""
    if not text and not sys.stdin.isatty():
        text = sys.stdin.read()
    if not text.strip():
        print("Error: No input provided", file=sys.stderr)
        return 1

    try:
        if args.enhance:
            intent = asyncio.run(parse_intent_enhanced(text))
        else:
            intent = parse_intent(text)
    except IntentParserError as e:
        print(f"Error parsing intent: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(success_envelope(intent), indent=2, ensure_ascii=False))
    else:
        print(format_intent(intent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
