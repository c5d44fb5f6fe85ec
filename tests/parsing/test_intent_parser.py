import pytest

from core.errors import EmptyInputError, InputTooLongError
from models.intent import (
    PaymentIntent,
    QueryBalanceIntent,
    QueryListIntent,
    QuerySearchIntent,
    QueryStatusIntent,
    QueryTransactionIntent,
)
from services.intent_parser import parse_intent

SAMPLE_INPUTS = [
    "send $500 to John in Manila",
    "send some money to my friend",
    "pay invoice INV-2024-089",
    "show my last payment",
    "did my payment to John go through",
    "what's my balance",
    "show my payment history",
    "find payment to Maria",
    "list all my transactions",
    "hello there",
]

# ---------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------

def test_full_payment_end_to_end():
    intent = parse_intent("send $500 to John in Manila")

    assert isinstance(intent, PaymentIntent)
    assert intent.type == "payment"
    assert intent.amount == 500.0
    assert intent.currency == "USD"
    assert intent.recipient == "John"
    assert intent.destination_country == "PH"
    assert intent.corridor == "USD-PHP"
    assert intent.urgency == "standard"
    assert intent.confidence > 0.9
    assert intent.missing_fields is None
    assert intent.clarification_needed is None


def test_vague_payment_asks_for_clarification():
    intent = parse_intent("send some money to my friend")

    assert intent.amount is None
    assert intent.currency is None
    assert intent.destination_country is None
    assert intent.corridor is None
    assert intent.confidence < 0.6
    assert intent.missing_fields
    assert intent.clarification_needed


@pytest.mark.parametrize("text", ["send money", "pay my sister", "transfer 500"])
def test_payments_missing_two_fields_are_low_confidence(text):
    intent = parse_intent(text)
    assert intent.type == "payment"
    assert len(intent.missing_fields) >= 2
    assert intent.confidence < 0.6
    assert intent.clarification_needed


def test_corridor_for_euro_to_morocco():
    intent = parse_intent("send 100 euros to Ahmed in Morocco")
    assert intent.corridor == "EUR-MAD"
    assert intent.confidence >= 0.9


def test_urgency_and_reference_are_carried():
    intent = parse_intent("urgent: pay invoice INV-2024-089 to Acme Corp")
    assert intent.urgency == "high"
    assert intent.reference == "INV-2024-089"


def test_payload_keeps_nullable_payment_fields():
    payload = parse_intent("send money").to_payload()
    for name in ("amount", "currency", "recipient", "destination_country", "corridor"):
        assert name in payload
        assert payload[name] is None
    assert "reference" not in payload


def test_configured_default_currency_flows_into_corridor(loaded_config):
    loaded_config(DEFAULT_CURRENCY="GBP")
    intent = parse_intent("send 300 to Maria in Manila")
    assert intent.currency == "GBP"
    assert intent.corridor == "GBP-PHP"

# ---------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------

def test_transaction_query():
    intent = parse_intent("show me the last 5 transactions")
    assert isinstance(intent, QueryTransactionIntent)
    assert intent.transaction_type == "last"
    assert intent.count == 5


def test_status_query_confidence_boost_is_capped():
    intent = parse_intent("check status of transaction TXN-12345")
    assert isinstance(intent, QueryStatusIntent)
    assert intent.transaction_id == "TXN-12345"
    assert intent.confidence == 0.95


def test_balance_query():
    intent = parse_intent("what's my balance")
    assert isinstance(intent, QueryBalanceIntent)
    assert intent.to_payload() == {
        "type": "query_balance",
        "confidence": 0.9,
        "raw_input": "what's my balance",
    }


def test_search_query():
    intent = parse_intent("find payment to Maria")
    assert isinstance(intent, QuerySearchIntent)
    assert intent.search_term == "Maria"
    assert intent.confidence <= 0.95


def test_list_query():
    intent = parse_intent("list all my transactions")
    assert isinstance(intent, QueryListIntent)
    assert intent.entity_type == "transactions"

# ---------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------

@pytest.mark.parametrize("text", SAMPLE_INPUTS)
def test_confidence_is_bounded(text):
    intent = parse_intent(text)
    assert 0.0 <= intent.confidence <= 1.0
    assert round(intent.confidence, 2) == intent.confidence


@pytest.mark.parametrize("text", SAMPLE_INPUTS)
def test_parsing_is_idempotent(text):
    assert parse_intent(text).to_payload() == parse_intent(text).to_payload()


def test_raw_input_is_trimmed():
    assert parse_intent("   send $5 to Bob   ").raw_input == "send $5 to Bob"


def test_intents_are_immutable():
    intent = parse_intent("send $500 to John in Manila")
    with pytest.raises(Exception):
        intent.amount = 1.0

# ---------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------

@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_input_is_rejected(text):
    with pytest.raises(EmptyInputError, match="Input cannot be empty"):
        parse_intent(text)


def test_overlong_input_is_rejected():
    with pytest.raises(InputTooLongError, match="maximum length of 1000"):
        parse_intent("x" * 1001)


def test_configured_max_length(loaded_config):
    loaded_config(MAX_INPUT_LENGTH="10")
    with pytest.raises(InputTooLongError) as exc:
        parse_intent("send $500 to John")
    assert exc.value.max_length == 10
