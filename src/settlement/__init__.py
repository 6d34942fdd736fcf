"""Settlement engine — Balancer (proportional dampening) and Matcher (greedy pairing).

Pipeline per request:
- Balancer reconciles imbalanced gain/loss totals
- Matcher pairs largest creditors with largest debtors
- Engine verifies the zero-sum and conservation invariants
"""

from .balancer import Balancer, balance
from .config import DEFAULT_PLACEHOLDER_NAME, DEFAULT_SETTLE_TOLERANCE, SettlementConfig
from .engine import SettlementEngine, SettlementInvariantViolation, settle
from .matcher import Matcher, match
from .report import format_amount, methodology_lines, render_report, transaction_lines

__all__ = [
    # Config
    "SettlementConfig",
    "DEFAULT_PLACEHOLDER_NAME",
    "DEFAULT_SETTLE_TOLERANCE",
    # Components
    "Balancer",
    "Matcher",
    "SettlementEngine",
    "SettlementInvariantViolation",
    # Functions
    "balance",
    "match",
    "settle",
    # Report
    "format_amount",
    "methodology_lines",
    "render_report",
    "transaction_lines",
]
