"""
Contract Validation Module

Validation of the JSON contracts of the payout settlement system.
"""

from .validators import (
    ContractValidator,
    PlayerLedgerValidator,
    SchemaLoader,
    SettlementResultValidator,
    validate_player_ledger,
    validate_settlement_result,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PlayerLedgerValidator",
    "SettlementResultValidator",
    # Functions
    "validate_player_ledger",
    "validate_settlement_result",
]
