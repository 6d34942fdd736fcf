"""
Numerical Safeguards — Safe Float Primitives

Player records arrive as user-entered floats. Before they reach the
settlement engine every value must be finite:
- NaN/Inf sanitization so invalid values never propagate
- Leading-number parsing for free-form text fields
- Range clamping for derived ratios

CRITICAL INVARIANTS:
1. NaN/Inf never propagate (replaced by the fallback)
2. All operations are deterministic and reproducible
"""

import math
import re
from typing import Final

# =============================================================================
# PARSING
# =============================================================================

# Leading decimal literal, optionally signed, with optional exponent.
# Matches the prefix a browser number field would accept ("12.5abc" -> 12.5).
LEADING_FLOAT_RE: Final[re.Pattern[str]] = re.compile(
    r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)


# =============================================================================
# NaN/Inf SANITIZATION
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Check that a float is finite (not NaN, not Inf).

    Args:
        value: Value to check

    Returns:
        True if the value is finite, False for NaN or Inf
    """
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Replace NaN/Inf with a fallback value.

    Args:
        value: Raw value
        fallback: Replacement for NaN/Inf (default: 0.0)

    Returns:
        value if finite, otherwise fallback

    Examples:
        >>> sanitize_float(10.0)
        10.0
        >>> sanitize_float(float('nan'))
        0.0
        >>> sanitize_float(float('-inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_float(value):
        return value
    return fallback


def parse_leading_float(text: str, fallback: float = 0.0) -> float:
    """
    Parse the leading numeric prefix of a string.

    Trailing garbage is ignored, and text without a numeric prefix yields
    the fallback. Non-finite results ("1e999") are sanitized.

    Examples:
        >>> parse_leading_float("12.50")
        12.5
        >>> parse_leading_float(" -3abc")
        -3.0
        >>> parse_leading_float("abc")
        0.0
    """
    match = LEADING_FLOAT_RE.match(text)
    if match is None:
        return fallback
    return sanitize_float(float(match.group(0)), fallback=fallback)


# =============================================================================
# UTILITIES
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Clamp a value into [min_value, max_value].

    Args:
        value: Raw value
        min_value: Lower bound (optional)
        max_value: Upper bound (optional)

    Returns:
        The value limited to the given range

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(15.0, 0.0, 10.0)
        10.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result
