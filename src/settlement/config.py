"""Settlement engine configuration."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from src.core.math.money import (
    DEFAULT_MINOR_UNIT_DIGITS,
    MAX_MINOR_UNIT_DIGITS,
    to_minor_units,
)


# =============================================================================
# CONSTANTS
# =============================================================================

# Positions and transfers at or below this amount count as settled
DEFAULT_SETTLE_TOLERANCE: Final[Decimal] = Decimal("0.01")

# Display label for participants without a name
DEFAULT_PLACEHOLDER_NAME: Final[str] = "Unnamed Player"


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SettlementConfig:
    """Settlement engine configuration.

    minor_unit_digits: currency precision (2 = cents)
    settle_tolerance: epsilon below which a balance counts as settled
    placeholder_name: label substituted for empty display names
    """

    minor_unit_digits: int = DEFAULT_MINOR_UNIT_DIGITS
    settle_tolerance: Decimal = DEFAULT_SETTLE_TOLERANCE
    placeholder_name: str = DEFAULT_PLACEHOLDER_NAME

    def __post_init__(self):
        if not 0 <= self.minor_unit_digits <= MAX_MINOR_UNIT_DIGITS:
            raise ValueError(
                f"minor_unit_digits must be in [0, {MAX_MINOR_UNIT_DIGITS}], "
                f"got {self.minor_unit_digits}"
            )
        # Accept floats/str from CLI flags
        if not isinstance(self.settle_tolerance, Decimal):
            object.__setattr__(self, "settle_tolerance", Decimal(str(self.settle_tolerance)))
        if not self.settle_tolerance.is_finite() or self.settle_tolerance < 0:
            raise ValueError(
                f"settle_tolerance must be a finite non-negative amount, "
                f"got {self.settle_tolerance}"
            )

    @property
    def tolerance_minor(self) -> int:
        """settle_tolerance expressed in integer minor units."""
        return to_minor_units(self.settle_tolerance, self.minor_unit_digits)
