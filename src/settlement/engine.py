"""Settlement engine: Balancer -> Matcher -> invariant check

Pure, synchronous computation over a caller-supplied snapshot of net
positions. No I/O and no state shared between calls; concurrent
invocations need no coordination.

Invariants verified on every run:
1. Adjusted amounts sum to exactly zero (minor units)
2. Nobody pays or receives more than their adjusted amount
3. The amount left unsettled is at most eps per member of the larger pool

A breach means a Balancer or Matcher defect and raises
SettlementInvariantViolation instead of returning a wrong settlement.
"""

import logging
from collections import defaultdict
from typing import Sequence

from src.core.domain.participant import AdjustedPosition, NetPosition
from src.core.domain.settlement import SettlementResult, Transaction
from src.core.math.money import from_minor_units, to_minor_units
from src.settlement.balancer import Balancer
from src.settlement.config import SettlementConfig
from src.settlement.matcher import Matcher

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class SettlementInvariantViolation(Exception):
    """
    Internal settlement invariant breached.

    Never caused by caller input: every finite input has a defined
    settlement. Raised only when balancing or matching produced an
    inconsistent result.
    """
    pass


# =============================================================================
# ENGINE
# =============================================================================


class SettlementEngine:
    """Settles net positions into a minimal list of transfers.

    Pipeline:
    1. Balancer: dampen the larger side if gains != losses
    2. Matcher: greedy largest-remaining pairing
    3. Invariant verification
    """

    def __init__(self, config: SettlementConfig | None = None):
        """Initialize the engine.

        Args:
            config: engine configuration (optional, defaults used)
        """
        self.config = config or SettlementConfig()
        self.balancer = Balancer(self.config)
        self.matcher = Matcher(self.config)

    def settle(self, positions: Sequence[NetPosition]) -> SettlementResult:
        """Settle one snapshot of net positions.

        Args:
            positions: ordered participant net positions

        Returns:
            SettlementResult with adjusted positions, transactions, summary

        Raises:
            SettlementInvariantViolation: on an internal consistency breach
        """
        adjusted, summary = self.balancer.balance(positions)
        transactions = self.matcher.match(adjusted)

        self._verify(adjusted, transactions)

        logger.debug(
            "Settled %d participants with %d transactions (dampening=%s)",
            len(positions),
            len(transactions),
            summary.dampening_target.value if summary.dampening_target else "none",
        )

        return SettlementResult(
            adjusted_positions=tuple(adjusted),
            transactions=tuple(transactions),
            summary=summary,
        )

    def _verify(
        self, adjusted: Sequence[AdjustedPosition], transactions: Sequence[Transaction]
    ) -> None:
        """Check zero-sum, no over-transfer and bounded unsettled remainder."""
        digits = self.config.minor_unit_digits
        eps = self.config.tolerance_minor

        nets: dict[str | int, int] = defaultdict(int)
        for p in adjusted:
            nets[p.participant_id] += to_minor_units(p.net_amount, digits)

        net_sum = sum(nets.values())
        if net_sum != 0:
            raise SettlementInvariantViolation(
                f"adjusted positions do not sum to zero: {from_minor_units(net_sum, digits)}"
            )

        paid: dict[str | int, int] = defaultdict(int)
        received: dict[str | int, int] = defaultdict(int)
        for t in transactions:
            amount = to_minor_units(t.amount, digits)
            paid[t.payer_id] += amount
            received[t.payee_id] += amount

        for participant_id, units in paid.items():
            if units > -nets.get(participant_id, 0):
                raise SettlementInvariantViolation(
                    f"participant {participant_id!r} pays {from_minor_units(units, digits)} "
                    f"beyond its debt"
                )
        for participant_id, units in received.items():
            if units > nets.get(participant_id, 0):
                raise SettlementInvariantViolation(
                    f"participant {participant_id!r} receives {from_minor_units(units, digits)} "
                    f"beyond its credit"
                )

        owed = sum(n for n in nets.values() if n > 0)
        creditors = sum(1 for n in nets.values() if n > 0)
        debtors = sum(1 for n in nets.values() if n < 0)
        unsettled = owed - sum(paid.values())
        if unsettled > eps * max(creditors, debtors):
            raise SettlementInvariantViolation(
                f"unsettled remainder {from_minor_units(unsettled, digits)} exceeds tolerance"
            )


def settle(
    positions: Sequence[NetPosition], config: SettlementConfig | None = None
) -> SettlementResult:
    """Settle net positions with a default or given configuration."""
    return SettlementEngine(config).settle(positions)
