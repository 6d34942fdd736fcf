"""
Core math modules for the payout settlement engine

Numerical primitives with determinism guarantees.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    LEADING_FLOAT_RE,
    clamp,
    is_valid_float,
    parse_leading_float,
    sanitize_float,
)

# Money (integer minor units)
from src.core.math.money import (
    DEFAULT_MINOR_UNIT_DIGITS,
    MAX_MINOR_UNIT_DIGITS,
    apportion,
    exact_sum,
    from_minor_units,
    integer_weights,
    quantize_amount,
    quantum,
    to_minor_units,
)

__all__ = [
    # Numerical Safeguards
    "LEADING_FLOAT_RE",
    "clamp",
    "is_valid_float",
    "parse_leading_float",
    "sanitize_float",
    # Money: constants
    "DEFAULT_MINOR_UNIT_DIGITS",
    "MAX_MINOR_UNIT_DIGITS",
    # Money: functions
    "apportion",
    "exact_sum",
    "from_minor_units",
    "integer_weights",
    "quantize_amount",
    "quantum",
    "to_minor_units",
]
