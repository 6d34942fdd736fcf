"""
Participant positions — engine input and Balancer output

NetPosition is the immutable snapshot the caller hands to the engine.
AdjustedPosition is produced fresh on every run by the Balancer and has
no identity beyond that run.

Sign convention: positive = the participant is owed money,
negative = the participant owes money.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator


# =============================================================================
# HELPERS
# =============================================================================


def coerce_decimal(value: Any) -> Any:
    """
    Exact conversion of numeric input to Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1") rather than the
    binary expansion. Non-finite values are rejected.
    """
    if isinstance(value, bool):
        raise ValueError("amount must be a number, got bool")

    if isinstance(value, (int, float, str)):
        try:
            value = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"amount is not a number: {value!r}") from e

    if isinstance(value, Decimal) and not value.is_finite():
        raise ValueError(f"amount must be finite (not NaN/Inf), got {value}")

    return value


def plain_decimal(value: Decimal) -> str:
    """Fixed-point text of a decimal, never exponent notation (1E+30, 5E-8)."""
    return format(value, "f")


# =============================================================================
# NET POSITION
# =============================================================================


class NetPosition(BaseModel):
    """
    A participant's final gain or loss for the settlement period.

    Immutable (frozen=True); the engine never mutates caller records.
    """

    participant_id: str | int = Field(..., description="Opaque id, unique per settlement run")
    name: str = Field(default="", description="Display name (may be empty)")
    net_amount: Decimal = Field(..., description="Signed net amount")

    model_config = {"frozen": True}

    @field_validator("net_amount", mode="before")
    @classmethod
    def validate_net_amount(cls, v: Any) -> Any:
        return coerce_decimal(v)

    @property
    def is_gain(self) -> bool:
        return self.net_amount > 0

    @property
    def is_loss(self) -> bool:
        return self.net_amount < 0


# =============================================================================
# ADJUSTED POSITION
# =============================================================================


class AdjustedPosition(BaseModel):
    """
    Net position after dampening.

    `net_amount` is quantized to the engine's minor-unit grid.
    `dampened` marks members of the side that was scaled down.
    """

    participant_id: str | int
    name: str = Field(..., description="Display name, placeholder already substituted")
    net_amount: Decimal
    dampened: bool = False

    model_config = {"frozen": True}

    @field_validator("net_amount", mode="before")
    @classmethod
    def validate_net_amount(cls, v: Any) -> Any:
        return coerce_decimal(v)

    @field_serializer("net_amount", when_used="json")
    def serialize_net_amount(self, v: Decimal) -> str:
        return plain_decimal(v)
