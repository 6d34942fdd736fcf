"""
PlayerRecord — editable player row of the ledger

Raw input record as captured by the ledger collaborator and exported to
JSON / share links: {id, name, buyIn, cashOut, delta}.

Edit rule (last-edited field wins):
- editing delta resets buyIn and cashOut to 0
- editing buyIn or cashOut recomputes delta = cashOut - buyIn
"""

from decimal import Decimal
from typing import Any, Final

from pydantic import BaseModel, Field, field_validator

from src.core.math.numerical_safeguards import parse_leading_float, sanitize_float

from .participant import NetPosition


# =============================================================================
# CONSTANTS
# =============================================================================

# Accepted edit field names -> model attribute
EDITABLE_FIELDS: Final[dict[str, str]] = {
    "name": "name",
    "buyIn": "buy_in",
    "buy_in": "buy_in",
    "cashOut": "cash_out",
    "cash_out": "cash_out",
    "delta": "delta",
}


# =============================================================================
# COERCION
# =============================================================================


def coerce_amount(value: Any) -> float:
    """
    Coerce free-form numeric input to a finite float.

    Mirrors a number field's `parseFloat(x) || 0`: the leading numeric
    prefix of text is used, anything else (including NaN/Inf) becomes 0.

    Examples:
        >>> coerce_amount("25.5")
        25.5
        >>> coerce_amount("")
        0.0
        >>> coerce_amount(float("nan"))
        0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        return sanitize_float(float(value))
    if isinstance(value, str):
        return parse_leading_float(value)
    return 0.0


# =============================================================================
# PLAYER RECORD
# =============================================================================


class PlayerRecord(BaseModel):
    """
    One player row.

    Immutable (frozen=True): with_field() returns a new record.
    Serialized with the camelCase aliases of the export format.
    """

    id: int | str = Field(..., description="Opaque player id")
    name: str = Field(default="")
    buy_in: float = Field(default=0.0, alias="buyIn")
    cash_out: float = Field(default=0.0, alias="cashOut")
    delta: float = Field(default=0.0)

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("buy_in", "cash_out", "delta", mode="before")
    @classmethod
    def validate_amounts(cls, v: Any) -> float:
        return coerce_amount(v)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> str:
        return "" if v is None else str(v)

    def with_field(self, field: str, value: Any) -> "PlayerRecord":
        """
        Apply a single field edit.

        Args:
            field: One of name, buyIn, cashOut, delta (snake_case also accepted)
            value: Raw input value (text or number)

        Returns:
            New PlayerRecord with the edit applied

        Raises:
            ValueError: If field is not editable
        """
        attr = EDITABLE_FIELDS.get(field)
        if attr is None:
            raise ValueError(f"unknown player field: {field!r}")

        if attr == "name":
            return self.model_copy(update={"name": "" if value is None else str(value)})

        amount = coerce_amount(value)

        if attr == "delta":
            return self.model_copy(update={"delta": amount, "buy_in": 0.0, "cash_out": 0.0})

        updated = self.model_copy(update={attr: amount})
        return updated.model_copy(update={"delta": updated.cash_out - updated.buy_in})

    def to_position(self) -> NetPosition:
        """Engine input for this player (net = delta)."""
        return NetPosition(participant_id=self.id, name=self.name, net_amount=self.delta)

    def to_record(self) -> dict[str, Any]:
        """Export form: {id, name, buyIn, cashOut, delta}."""
        return self.model_dump(by_alias=True)
