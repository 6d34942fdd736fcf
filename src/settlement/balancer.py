"""Balancer: proportional dampening of imbalanced gains/losses

When recorded gains and losses disagree (data-entry error, missed buy-in,
rounding) the larger side is scaled down to match the smaller side:
- gains > losses: every gainer is multiplied by losses / gains
- losses > gains: every loser is multiplied by gains / losses
- otherwise positions pass through untouched

The decision, the summary totals and the factor use the exact input
amounts. Adjusted amounts are then laid on the minor-unit grid: the
untouched side is rounded member by member and the scaled side gets a
largest-remainder split of that total, weighted by the exact inputs, so
adjusted amounts always sum to zero.

Total function over all finite inputs, including the empty list.
"""

import logging
from decimal import Decimal
from typing import Sequence

from src.core.domain.participant import AdjustedPosition, NetPosition
from src.core.domain.settlement import DampeningTarget, SettlementSummary
from src.core.math.money import (
    apportion,
    exact_sum,
    from_minor_units,
    integer_weights,
    to_minor_units,
)
from src.core.math.numerical_safeguards import clamp
from src.settlement.config import SettlementConfig

logger = logging.getLogger(__name__)


class Balancer:
    """Detects gain/loss imbalance and applies proportional dampening.

    Order of the decision rule (mutually exclusive):
    1. total_gains > total_losses and total_gains > 0 -> dampen gains
    2. total_losses > total_gains and total_losses > 0 -> dampen losses
    3. otherwise -> no dampening, factor = 1
    """

    def __init__(self, config: SettlementConfig | None = None):
        """Initialize the balancer.

        Args:
            config: engine configuration (optional, defaults used)
        """
        self.config = config or SettlementConfig()

    def balance(
        self, positions: Sequence[NetPosition]
    ) -> tuple[list[AdjustedPosition], SettlementSummary]:
        """Compute adjusted positions and dampening metadata.

        Args:
            positions: ordered participant net positions (not mutated)

        Returns:
            (adjusted positions in input order, summary with ORIGINAL totals)
        """
        digits = self.config.minor_unit_digits
        nets = [p.net_amount for p in positions]

        total_gains = exact_sum(n for n in nets if n > 0)
        total_losses = exact_sum(-n for n in nets if n < 0)

        target: DampeningTarget | None = None
        factor = 1.0
        excess = Decimal(0)

        if total_gains > total_losses and total_gains > 0:
            target = DampeningTarget.GAINS
            factor = float(total_losses / total_gains)
            excess = exact_sum([total_gains, -total_losses])
        elif total_losses > total_gains and total_losses > 0:
            target = DampeningTarget.LOSSES
            factor = float(total_gains / total_losses)
            excess = exact_sum([total_losses, -total_gains])

        if target is not None:
            logger.info(
                "Dampening %s by factor %.4f (gains=%s, losses=%s, excess=%s)",
                target.value, factor, total_gains, total_losses, excess,
            )

        units = self._to_grid(nets, target, digits)

        adjusted_positions = [
            AdjustedPosition(
                participant_id=position.participant_id,
                name=position.name or self.config.placeholder_name,
                net_amount=from_minor_units(amount, digits),
                dampened=self._is_dampened(target, original),
            )
            for position, original, amount in zip(positions, nets, units)
        ]

        summary = SettlementSummary(
            total_gains=total_gains,
            total_losses=total_losses,
            dampening_applied=target is not None,
            dampening_target=target,
            dampening_factor=clamp(factor, 0.0, 1.0),
            excess_amount=excess,
        )

        return adjusted_positions, summary

    @staticmethod
    def _to_grid(
        nets: list[Decimal], target: DampeningTarget | None, digits: int
    ) -> list[int]:
        """Adjusted amounts in minor units, summing exactly to zero.

        The scaled side (losers when losses are dampened, gainers
        otherwise) is split over the rounded total of the other side.
        Equal exact totals can still round apart, so the gains side is
        re-split even when nothing is dampened.
        """
        units = [to_minor_units(n, digits) for n in nets]
        if target is DampeningTarget.LOSSES:
            scaled = [k for k, n in enumerate(nets) if n < 0]
            side_total = sum(u for u in units if u > 0)
            sign = -1
        else:
            scaled = [k for k, n in enumerate(nets) if n > 0]
            side_total = -sum(units[k] for k, n in enumerate(nets) if n < 0)
            sign = 1

        parts = apportion(integer_weights([abs(nets[k]) for k in scaled]), side_total)
        for k, part in zip(scaled, parts):
            units[k] = sign * part
        return units

    @staticmethod
    def _is_dampened(target: DampeningTarget | None, original: Decimal) -> bool:
        if target is DampeningTarget.GAINS:
            return original > 0
        if target is DampeningTarget.LOSSES:
            return original < 0
        return False


def balance(
    positions: Sequence[NetPosition], config: SettlementConfig | None = None
) -> tuple[list[AdjustedPosition], SettlementSummary]:
    """Balance net positions with a default or given configuration.

    Args:
        positions: participant net positions

    Returns:
        (adjusted positions, summary)
    """
    return Balancer(config).balance(positions)
