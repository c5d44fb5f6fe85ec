# FILE: models/intent.py
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from core.errors import LLMResponseUnparsableError

# -----------------------------
# Shared shapes
# -----------------------------
class DateRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Optional[str] = Field(None, description="Start of the range, as written by the user")
    end: Optional[str] = Field(None, description="End of the range, as written by the user")


class TransactionFilters(BaseModel):
    model_config = ConfigDict(frozen=True)

    recipient: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    status: Optional[str] = None


class SearchFilters(BaseModel):
    model_config = ConfigDict(frozen=True)

    recipient: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    date: Optional[str] = None


class ListFilters(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Optional[str] = None
    currency: Optional[str] = None
    date: Optional[str] = None


# -----------------------------
# Intents
# -----------------------------
class BaseIntent(BaseModel):
    """
    A passive, immutable record of what the user wants.
    This does NOT execute logic.
    """

    model_config = ConfigDict(frozen=True)

    # Fields always emitted even when null
    NULLABLE_FIELDS: ClassVar[frozenset] = frozenset()

    confidence: float = Field(..., ge=0.0, le=1.0)
    raw_input: str

    def to_payload(self) -> Dict[str, Any]:
        """JSON-safe dict: unset optionals dropped, nullable primaries kept."""
        payload = self.model_dump(mode="json", exclude_none=True)
        for name in self.NULLABLE_FIELDS:
            payload.setdefault(name, None)
        return payload


class PaymentIntent(BaseIntent):
    NULLABLE_FIELDS: ClassVar[frozenset] = frozenset(
        {"amount", "currency", "recipient", "destination_country", "corridor"}
    )

    type: Literal["payment"] = "payment"
    amount: Optional[float] = Field(None, gt=0)
    currency: Optional[str] = None
    recipient: Optional[str] = None
    destination_country: Optional[str] = None
    corridor: Optional[str] = None
    urgency: Literal["standard", "high"] = "standard"
    reference: Optional[str] = None
    missing_fields: Optional[List[str]] = None
    clarification_needed: Optional[str] = None

    @field_validator("missing_fields")
    @classmethod
    def empty_missing_is_none(cls, v):
        return v or None


class QueryTransactionIntent(BaseIntent):
    type: Literal["query_transaction"] = "query_transaction"
    transaction_type: Optional[Literal["last", "recent", "latest", "first", "oldest"]] = None
    count: Optional[int] = None
    date_range: Optional[DateRange] = None
    filters: Optional[TransactionFilters] = None


class QueryStatusIntent(BaseIntent):
    type: Literal["query_status"] = "query_status"
    recipient: Optional[str] = None
    reference: Optional[str] = None
    transaction_id: Optional[str] = None
    payment_id: Optional[str] = None
    date: Optional[str] = None


class QueryBalanceIntent(BaseIntent):
    type: Literal["query_balance"] = "query_balance"
    currency: Optional[str] = None
    account_type: Optional[str] = None


class QueryHistoryIntent(BaseIntent):
    type: Literal["query_history"] = "query_history"
    date_range: Optional[DateRange] = None
    filters: Optional[TransactionFilters] = None
    limit: Optional[int] = None


class QuerySearchIntent(BaseIntent):
    type: Literal["query_search"] = "query_search"
    search_term: str = "all"
    filters: Optional[SearchFilters] = None


class QueryListIntent(BaseIntent):
    type: Literal["query_list"] = "query_list"
    entity_type: Literal["transactions", "payments", "recipients", "accounts"] = "transactions"
    filters: Optional[ListFilters] = None
    limit: Optional[int] = None


ParsedIntent = Annotated[
    Union[
        PaymentIntent,
        QueryTransactionIntent,
        QueryStatusIntent,
        QueryBalanceIntent,
        QueryHistoryIntent,
        QuerySearchIntent,
        QueryListIntent,
    ],
    Field(discriminator="type"),
]

_intent_adapter = TypeAdapter(ParsedIntent)


def intent_from_dict(data: Mapping[str, Any]) -> BaseIntent:
    """Validate a plain dict into the matching intent model."""
    return _intent_adapter.validate_python(dict(data))


# -----------------------------
# Merge (enhancement)
# -----------------------------
def merge_intent(
    base: BaseIntent,
    patch: Mapping[str, Any],
    *,
    confidence: Optional[float] = None,
) -> BaseIntent:
    """
    Shallow-merge `patch` over `base` and return a new intent.

    - Keys in `patch` win on collision (including explicit nulls).
    - `raw_input` always comes from `base`.
    - `confidence` is `base.confidence` unless an explicit value is passed;
      a confidence inside `patch` is ignored.

    Raises LLMResponseUnparsableError if the merged record does not validate.
    """
    merged = base.model_dump(mode="json")
    for key, value in patch.items():
        if key in ("confidence", "raw_input"):
            continue
        merged[key] = value

    merged["raw_input"] = base.raw_input
    merged["confidence"] = base.confidence if confidence is None else confidence

    try:
        return intent_from_dict(merged)
    except ValidationError as e:
        raise LLMResponseUnparsableError(f"Merged intent failed validation: {e}") from e
