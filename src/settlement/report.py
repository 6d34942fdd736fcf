"""Plain-text rendering of a settlement result

Transaction lines plus a short methodology block explaining any
dampening. Formatting only: amounts are rounded for display, the
result itself is never altered.
"""

from decimal import Decimal

from src.core.domain.settlement import DampeningTarget, SettlementResult, SettlementSummary
from src.core.math.money import DEFAULT_MINOR_UNIT_DIGITS, quantize_amount

EMPTY_MESSAGE = "Add players to see results"
EVEN_MESSAGE = "All players are even"
GREEDY_MESSAGE = (
    "Transactions calculated using greedy settlement algorithm to minimize number of payments."
)


def format_amount(
    amount: Decimal, currency: str = "$", digits: int = DEFAULT_MINOR_UNIT_DIGITS
) -> str:
    """'$12.34' style display string."""
    return f"{currency}{quantize_amount(amount, digits)}"


def transaction_lines(
    result: SettlementResult, currency: str = "$", digits: int = DEFAULT_MINOR_UNIT_DIGITS
) -> list[str]:
    return [
        f"{t.payer} pays {t.payee} {format_amount(t.amount, currency, digits)}"
        for t in result.transactions
    ]


def methodology_lines(
    summary: SettlementSummary, currency: str = "$", digits: int = DEFAULT_MINOR_UNIT_DIGITS
) -> list[str]:
    """Explain how the transactions were derived.

    Dampened runs list the original totals, the excess and the factor;
    untouched runs get the greedy-algorithm sentence.
    """
    if not summary.dampening_applied:
        return [GREEDY_MESSAGE]

    side = "winners" if summary.dampening_target is DampeningTarget.GAINS else "losers"
    excess_label = "wins" if summary.dampening_target is DampeningTarget.GAINS else "losses"
    closing = (
        "Winners' gains reduced proportionally to match available funds."
        if summary.dampening_target is DampeningTarget.GAINS
        else "Losers' losses reduced proportionally to match available funds."
    )
    percentage = f"{summary.dampening_factor * 100:.1f}%"

    return [
        f"Proportional dampening applied to {side}:",
        f"  - Original total wins: {format_amount(summary.total_gains, currency, digits)}",
        f"  - Original total losses: {format_amount(summary.total_losses, currency, digits)}",
        f"  - Excess {excess_label}: {format_amount(summary.excess_amount, currency, digits)}",
        f"  - Dampening factor: {percentage} ({summary.dampening_factor:.4f})",
        closing,
    ]


def render_report(
    result: SettlementResult, currency: str = "$", digits: int = DEFAULT_MINOR_UNIT_DIGITS
) -> str:
    """Full report: transactions, then a Methodology section.

    A result without participants renders as the empty-ledger message,
    one without transactions as the 'all even' message.
    """
    if not result.adjusted_positions:
        return EMPTY_MESSAGE
    if result.is_settled:
        return EVEN_MESSAGE

    lines = transaction_lines(result, currency, digits)
    lines.append("")
    lines.append("Methodology")
    lines.extend(methodology_lines(result.summary, currency, digits))
    return "\n".join(lines)
