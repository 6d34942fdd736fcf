"""Matcher: greedy largest-remaining-balance settlement

Converts balanced (or dampened) positions into payer -> payee transfers:
1. Creditors (amount > eps) and debtors (amount < -eps) are pooled with
   a mutable remaining balance; positions within eps count as settled
2. Both pools are sorted by remaining balance, largest first (stable)
3. Two pointers walk the pools; each step transfers
   min(creditor.remaining, debtor.remaining) and advances every pointer
   whose remaining balance drops to eps or below

Pairing the largest creditor with the largest debtor keeps the number of
transfers at most creditors + debtors - 1. It is a heuristic, not a
proven global minimum for every distribution. O(n log n).

Amounts are compared on the minor-unit grid. Balancer output is already
on it; off-grid amounts passed in directly are first rounded half-even
to whole minor units, so 0.014 counts as 0.01 and is dust under the
default eps.

Total function: empty or already-settled input yields no transactions.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from src.core.domain.participant import AdjustedPosition
from src.core.domain.settlement import Transaction
from src.core.math.money import from_minor_units, to_minor_units
from src.settlement.config import SettlementConfig

logger = logging.getLogger(__name__)


@dataclass
class _OpenBalance:
    """Pool entry with the amount still to be paid or received (minor units)."""

    position: AdjustedPosition
    remaining: int


class Matcher:
    """Greedy two-pointer matcher over creditor and debtor pools."""

    def __init__(self, config: SettlementConfig | None = None):
        """Initialize the matcher.

        Args:
            config: engine configuration (optional, defaults used)
        """
        self.config = config or SettlementConfig()

    def match(self, adjusted: Sequence[AdjustedPosition]) -> list[Transaction]:
        """Produce the transaction list for adjusted positions.

        Args:
            adjusted: adjusted positions (ideally summing to zero); amounts
                are rounded half-even to the minor-unit grid before the
                eps comparison

        Returns:
            Transactions in emission order
        """
        digits = self.config.minor_unit_digits
        eps = self.config.tolerance_minor

        creditors: list[_OpenBalance] = []
        debtors: list[_OpenBalance] = []
        for position in adjusted:
            units = to_minor_units(position.net_amount, digits)
            if units > eps:
                creditors.append(_OpenBalance(position, units))
            elif units < -eps:
                debtors.append(_OpenBalance(position, -units))

        # list.sort is stable with reverse=True: ties keep input order
        creditors.sort(key=lambda b: b.remaining, reverse=True)
        debtors.sort(key=lambda b: b.remaining, reverse=True)

        transactions: list[Transaction] = []
        i = j = 0

        while i < len(creditors) and j < len(debtors):
            creditor = creditors[i]
            debtor = debtors[j]

            amount = min(creditor.remaining, debtor.remaining)

            if amount > eps:
                transactions.append(
                    Transaction(
                        payer_id=debtor.position.participant_id,
                        payer=debtor.position.name,
                        payee_id=creditor.position.participant_id,
                        payee=creditor.position.name,
                        amount=from_minor_units(amount, digits),
                    )
                )
                logger.debug(
                    "%s pays %s %s", debtor.position.name, creditor.position.name,
                    from_minor_units(amount, digits),
                )

            creditor.remaining -= amount
            debtor.remaining -= amount

            if creditor.remaining <= eps:
                i += 1
            if debtor.remaining <= eps:
                j += 1

        return transactions


def match(
    adjusted: Sequence[AdjustedPosition], config: SettlementConfig | None = None
) -> list[Transaction]:
    """Match adjusted positions with a default or given configuration."""
    return Matcher(config).match(adjusted)
