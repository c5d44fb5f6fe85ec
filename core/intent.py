# core/intent.py
from enum import Enum


class IntentType(str, Enum):
    """
    What kind of statement the user made.
    Decided by the intent classifier (single authority).
    """

    PAYMENT = "payment"
    QUERY_TRANSACTION = "query_transaction"
    QUERY_STATUS = "query_status"
    QUERY_BALANCE = "query_balance"
    QUERY_HISTORY = "query_history"
    QUERY_SEARCH = "query_search"
    QUERY_LIST = "query_list"
    UNKNOWN = "unknown"

    # -----------------------------
    # Semantic helpers
    # -----------------------------
    def is_payment(self) -> bool:
        return self is IntentType.PAYMENT


# Human-readable labels used by the CLI
INTENT_LABELS = {
    IntentType.PAYMENT: "Payment Intent",
    IntentType.QUERY_TRANSACTION: "Transaction Query",
    IntentType.QUERY_STATUS: "Status Query",
    IntentType.QUERY_BALANCE: "Balance Query",
    IntentType.QUERY_HISTORY: "History Query",
    IntentType.QUERY_SEARCH: "Search Query",
    IntentType.QUERY_LIST: "List Query",
    IntentType.UNKNOWN: "Unknown Intent",
}
