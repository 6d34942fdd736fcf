"""
Money — Integer Minor-Unit Arithmetic

All settlement arithmetic runs on integer minor units (cents for the
default two-digit currency). Decimal amounts are quantized once on entry
and rebuilt once on exit, so chained dampening and matching never
accumulate float noise.

CRITICAL INVARIANTS:
1. to_minor_units / from_minor_units round-trip exactly for quantized amounts
2. apportion() parts always sum exactly to the requested target
3. Rounding is ROUND_HALF_EVEN (0.005 -> 0.00, 0.015 -> 0.02)
"""

from decimal import ROUND_HALF_EVEN, Decimal, getcontext, localcontext
from typing import Final, Iterable, Sequence

# =============================================================================
# CONSTANTS
# =============================================================================

# Digits after the decimal point for the default currency (USD cents)
DEFAULT_MINOR_UNIT_DIGITS: Final[int] = 2

# Upper bound on supported precision
MAX_MINOR_UNIT_DIGITS: Final[int] = 8


# =============================================================================
# CONVERSION
# =============================================================================


def _wide_context(precision: int):
    """Local decimal context with at least `precision` significant digits."""
    context = getcontext().copy()
    context.prec = max(context.prec, precision)
    return localcontext(context)


def _coefficient(amount: Decimal) -> int:
    """Unsigned integer coefficient of a finite decimal."""
    return int("".join(map(str, amount.as_tuple().digits)))


def quantum(digits: int = DEFAULT_MINOR_UNIT_DIGITS) -> Decimal:
    """Smallest representable amount for the given precision (0.01 for 2)."""
    return Decimal((0, (1,), -digits))


def quantize_amount(amount: Decimal, digits: int = DEFAULT_MINOR_UNIT_DIGITS) -> Decimal:
    """
    Round an amount to the minor-unit grid.

    Works for any finite magnitude: the context precision is widened to
    hold every integer digit plus the minor-unit digits.

    Args:
        amount: Raw decimal amount
        digits: Minor-unit digits

    Returns:
        Amount rounded half-even to `digits` places
    """
    with _wide_context(amount.adjusted() + digits + 2):
        return amount.quantize(quantum(digits), rounding=ROUND_HALF_EVEN)


def to_minor_units(amount: Decimal, digits: int = DEFAULT_MINOR_UNIT_DIGITS) -> int:
    """
    Convert a decimal amount to integer minor units.

    Examples:
        >>> to_minor_units(Decimal("12.34"))
        1234
        >>> to_minor_units(Decimal("-0.005"))
        0
        >>> to_minor_units(Decimal("0.015"))
        2
    """
    quantized = quantize_amount(amount, digits)
    # exponent is exactly -digits after quantize
    units = _coefficient(quantized)
    return -units if quantized.is_signed() else units


def from_minor_units(units: int, digits: int = DEFAULT_MINOR_UNIT_DIGITS) -> Decimal:
    """
    Convert integer minor units back to a decimal amount (exact).

    Examples:
        >>> from_minor_units(1234)
        Decimal('12.34')
        >>> from_minor_units(-5)
        Decimal('-0.05')
    """
    sign = 1 if units < 0 else 0
    return Decimal((sign, tuple(int(c) for c in str(abs(units))), -digits))


# =============================================================================
# EXACT AGGREGATES
# =============================================================================


def exact_sum(amounts: Iterable[Decimal]) -> Decimal:
    """
    Sum decimals without context rounding.

    Examples:
        >>> exact_sum([Decimal("1E+30"), Decimal("0.004")])
        Decimal('1000000000000000000000000000000.004')
    """
    amounts = list(amounts)
    if not amounts:
        return Decimal(0)
    top = max(a.adjusted() for a in amounts)
    bottom = min(a.as_tuple().exponent for a in amounts)
    with _wide_context(top - bottom + len(str(len(amounts))) + 2):
        return sum(amounts, Decimal(0))


def integer_weights(amounts: Sequence[Decimal]) -> list[int]:
    """
    Exact integers in the same ratio as non-negative decimal amounts.

    Every amount is scaled to the smallest exponent present, so the
    weights keep the full input precision (sub-minor-unit digits too).

    Raises:
        ValueError: On a negative amount

    Examples:
        >>> integer_weights([Decimal("0.004"), Decimal("1.5")])
        [4, 1500]
    """
    if any(a < 0 for a in amounts):
        raise ValueError(f"amounts must be non-negative, got {list(amounts)}")
    if not amounts:
        return []
    bottom = min(a.as_tuple().exponent for a in amounts)
    return [_coefficient(a) * 10 ** (a.as_tuple().exponent - bottom) for a in amounts]


# =============================================================================
# PROPORTIONAL SPLIT
# =============================================================================


def apportion(weights: Sequence[int], target: int) -> list[int]:
    """
    Split an integer total proportionally to integer weights.

    Largest-remainder method: every part starts at floor(w * target / W),
    then the leftover units go one each to the parts with the largest
    remainders. Equal remainders favour the earlier weight.

    Args:
        weights: Non-negative integer weights
        target: Non-negative integer total to distribute

    Returns:
        Parts, one per weight, summing exactly to target
        (all zeros when the weights sum to zero)

    Raises:
        ValueError: On negative weights or a negative target

    Examples:
        >>> apportion([5000, 5000], 7000)
        [3500, 3500]
        >>> apportion([1, 1, 1], 2)
        [1, 1, 0]
    """
    if target < 0:
        raise ValueError(f"target must be non-negative, got {target}")
    if any(w < 0 for w in weights):
        raise ValueError(f"weights must be non-negative, got {list(weights)}")

    total = sum(weights)
    if total == 0:
        return [0] * len(weights)

    parts: list[int] = []
    remainders: list[int] = []
    for weight in weights:
        part, remainder = divmod(weight * target, total)
        parts.append(part)
        remainders.append(remainder)

    leftover = target - sum(parts)
    # sorted() is stable: equal remainders keep input order
    by_remainder = sorted(range(len(weights)), key=lambda k: remainders[k], reverse=True)
    for k in by_remainder[:leftover]:
        parts[k] += 1

    return parts
