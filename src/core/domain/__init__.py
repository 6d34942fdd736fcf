"""
Domain models and value objects.

Contains the settlement entities: NetPosition, AdjustedPosition,
Transaction, SettlementSummary, SettlementResult and the editable
PlayerRecord of the ledger.
"""

from src.core.domain.participant import (
    AdjustedPosition,
    NetPosition,
    coerce_decimal,
    plain_decimal,
)
from src.core.domain.player import EDITABLE_FIELDS, PlayerRecord, coerce_amount
from src.core.domain.settlement import (
    DampeningTarget,
    SettlementResult,
    SettlementSummary,
    Transaction,
)

__all__ = [
    # Participant positions
    "NetPosition",
    "AdjustedPosition",
    "coerce_decimal",
    "plain_decimal",
    # Settlement output
    "Transaction",
    "DampeningTarget",
    "SettlementSummary",
    "SettlementResult",
    # Player ledger rows
    "PlayerRecord",
    "EDITABLE_FIELDS",
    "coerce_amount",
]
