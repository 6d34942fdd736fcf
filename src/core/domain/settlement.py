"""
Settlement output models

Transaction, SettlementSummary and SettlementResult are output-only and
ephemeral: the engine never persists them. JSON dumps follow the
settlement_result contract (src/core/contracts/schema/settlement_result.json).
"""

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

from .participant import AdjustedPosition, coerce_decimal, plain_decimal


# =============================================================================
# ENUMS
# =============================================================================


class DampeningTarget(str, Enum):
    """Side scaled down by the Balancer."""

    GAINS = "gains"
    LOSSES = "losses"


# =============================================================================
# TRANSACTION
# =============================================================================


class Transaction(BaseModel):
    """
    A single payer -> payee transfer.

    Names are for display; ids keep participants with identical or
    missing names individually addressable.
    """

    payer_id: str | int
    payer: str
    payee_id: str | int
    payee: str
    amount: Decimal = Field(..., gt=0, description="Transfer amount (strictly positive)")

    model_config = {"frozen": True}

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Any:
        return coerce_decimal(v)

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, v: Decimal) -> str:
        return plain_decimal(v)


# =============================================================================
# SUMMARY
# =============================================================================


class SettlementSummary(BaseModel):
    """
    Dampening metadata for one settlement run.

    Totals are always the ORIGINAL (pre-dampening) totals so the caller
    can explain the adjustment.
    """

    total_gains: Decimal = Field(..., ge=0, description="Original sum of positive nets")
    total_losses: Decimal = Field(..., ge=0, description="Original |sum of negative nets|")
    dampening_applied: bool
    dampening_target: DampeningTarget | None = None
    dampening_factor: float = Field(default=1.0, ge=0.0, le=1.0)
    excess_amount: Decimal = Field(default=Decimal("0"), ge=0)

    model_config = {"frozen": True}

    @field_serializer("total_gains", "total_losses", "excess_amount", when_used="json")
    def serialize_totals(self, v: Decimal) -> str:
        return plain_decimal(v)

    @model_validator(mode="after")
    def validate_target_consistency(self) -> "SettlementSummary":
        """dampening_applied and dampening_target must agree."""
        if self.dampening_applied != (self.dampening_target is not None):
            raise ValueError(
                f"dampening_applied={self.dampening_applied} inconsistent with "
                f"dampening_target={self.dampening_target}"
            )
        if not self.dampening_applied and self.dampening_factor != 1.0:
            raise ValueError(
                f"dampening_factor must be 1.0 when untouched, got {self.dampening_factor}"
            )
        return self


# =============================================================================
# RESULT
# =============================================================================


class SettlementResult(BaseModel):
    """Complete engine output: adjusted positions, transactions, summary."""

    adjusted_positions: tuple[AdjustedPosition, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    summary: SettlementSummary

    model_config = {"frozen": True}

    @property
    def is_settled(self) -> bool:
        """True when nobody has to pay anybody."""
        return not self.transactions

    def total_transferred(self) -> Decimal:
        """Sum of all transaction amounts."""
        return sum((t.amount for t in self.transactions), Decimal("0"))

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dump (decimals as strings)."""
        return self.model_dump(mode="json")
