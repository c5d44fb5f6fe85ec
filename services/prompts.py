# FILE: services/prompts.py
import json
from typing import Any, Dict, Iterable

INTENT_PARSING_SYSTEM_PROMPT = (
    "You are an expert at parsing natural language payment and transaction queries into structured JSON.\n\n"
    "Your task is to analyze user input and extract structured information about:\n"
    "1. Payment intents (sending money)\n"
    "2. Transaction queries (showing transactions)\n"
    "3. Status queries (checking payment status)\n"
    "4. Balance queries\n"
    "5. History queries\n"
    "6. Search queries\n"
    "7. List queries\n\n"
    "Return ONLY valid JSON, no additional text or explanation."
)


def _as_json(intent: Dict[str, Any]) -> str:
    return json.dumps(intent, indent=2, ensure_ascii=False)


def payment_intent_prompt(text: str, current: Dict[str, Any]) -> str:
    return (
        f'Parse this payment intent: "{text}"\n\n'
        "Current parsed data (from pattern matching):\n"
        f"{_as_json(current)}\n\n"
        "Extract and return a JSON object with these fields:\n"
        "- amount: number or null\n"
        "- currency: string (ISO code like USD, EUR) or null\n"
        "- recipient: string or null\n"
        "- destination_country: string (ISO country code) or null\n"
        '- urgency: "standard" or "high"\n'
        "- reference: string (invoice/transaction ID) or null\n\n"
        "Fill in any missing fields. Return ONLY the JSON object, no markdown formatting."
    )


def query_intent_prompt(text: str, intent_type: str, current: Dict[str, Any]) -> str:
    return (
        f'Parse this {intent_type} query: "{text}"\n\n'
        "Current parsed data (from pattern matching):\n"
        f"{_as_json(current)}\n\n"
        "Extract and return a JSON object with relevant fields for this query type.\n"
        "Fill in any missing fields based on the input.\n\n"
        "Return ONLY the JSON object, no markdown formatting."
    )


def missing_fields_prompt(text: str, current: Dict[str, Any], missing_fields: Iterable[str]) -> str:
    return (
        f'Enhance this parsed intent: "{text}"\n\n'
        "Current parsed data:\n"
        f"{_as_json(current)}\n\n"
        f"Missing or unclear fields: {', '.join(missing_fields)}\n\n"
        "Extract the missing fields from the input and return a JSON object with the complete data.\n"
        "Return ONLY the JSON object, no markdown formatting."
    )
