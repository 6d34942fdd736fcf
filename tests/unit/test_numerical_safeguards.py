"""
Tests for Numerical Safeguards

Checks:
1. NaN/Inf sanitization
2. Leading-number parsing of free-form text
3. Range clamping
"""

import math

import pytest

from src.core.math.numerical_safeguards import (
    clamp,
    is_valid_float,
    parse_leading_float,
    sanitize_float,
)

# =============================================================================
# NaN/Inf SANITIZATION
# =============================================================================


class TestIsValidFloat:
    """Tests for is_valid_float"""

    def test_finite_values_valid(self) -> None:
        assert is_valid_float(0.0)
        assert is_valid_float(-123.45)
        assert is_valid_float(1e300)

    def test_nan_inf_invalid(self) -> None:
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))


class TestSanitizeFloat:
    """Tests for sanitize_float"""

    def test_finite_value_unchanged(self) -> None:
        assert sanitize_float(10.0) == 10.0
        assert sanitize_float(-0.5) == -0.5

    def test_nan_replaced_with_default_fallback(self) -> None:
        assert sanitize_float(float("nan")) == 0.0

    def test_inf_replaced_with_custom_fallback(self) -> None:
        assert sanitize_float(float("inf"), fallback=-1.0) == -1.0
        assert sanitize_float(float("-inf"), fallback=7.0) == 7.0


# =============================================================================
# PARSING
# =============================================================================


class TestParseLeadingFloat:
    """Tests for parse_leading_float (number-field semantics)"""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("12.50", 12.5),
            ("  -3", -3.0),
            ("+4.25", 4.25),
            (".5", 0.5),
            ("7.", 7.0),
            ("1e2", 100.0),
            ("12abc", 12.0),
            ("3.5.6", 3.5),
        ],
    )
    def test_numeric_prefix_parsed(self, text: str, expected: float) -> None:
        assert parse_leading_float(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "abc", "-", ".", "e5", "NaN", "Infinity"])
    def test_non_numeric_text_gives_fallback(self, text: str) -> None:
        assert parse_leading_float(text) == 0.0

    def test_overflow_sanitized(self) -> None:
        """1e999 overflows to inf -> fallback"""
        result = parse_leading_float("1e999", fallback=0.0)
        assert result == 0.0
        assert math.isfinite(result)

    def test_custom_fallback(self) -> None:
        assert parse_leading_float("x", fallback=-1.0) == -1.0


# =============================================================================
# UTILITIES
# =============================================================================


class TestClamp:
    """Tests for clamp"""

    def test_value_inside_range_unchanged(self) -> None:
        assert clamp(5.0, 0.0, 10.0) == 5.0

    def test_value_clamped_to_bounds(self) -> None:
        assert clamp(-1.0, 0.0, 10.0) == 0.0
        assert clamp(15.0, 0.0, 10.0) == 10.0

    def test_open_bounds(self) -> None:
        assert clamp(-100.0, max_value=1.0) == -100.0
        assert clamp(100.0, min_value=1.0) == 100.0
        assert clamp(3.0) == 3.0
