"""
Shared helpers for the layout, price, cost and margin calculators.

Input: StickerSpec / MaterialRollSpec value objects
Output: frozen result models from schemas.py
"""

import math

from ..errors import InvalidDimensions, InvalidUnitCost
from ..schemas import StickerSpec

# Counts computed by floor() get this much slack so a sticker that fits
# exactly (53.25" usable, 5.175" + 0.15" pitch) is not lost to float error.
FIT_TOLERANCE = 1e-9


class BaseCalculator:
    """All engine calculators inherit from this."""

    INCHES_PER_FOOT = 12.0

    def validate_sticker(self, spec: StickerSpec) -> None:
        """Width/height must be positive and finite; quantity must be >= 1."""
        for name, value in (("width", spec.width_inches), ("height", spec.height_inches)):
            if not math.isfinite(value) or value <= 0:
                raise InvalidDimensions(f"Sticker {name} must be a positive number, got {value}")
        if spec.quantity < 1:
            raise InvalidDimensions(f"Quantity must be at least 1, got {spec.quantity}")

    def require_positive(self, name: str, value: float) -> None:
        if not math.isfinite(value) or value <= 0:
            raise InvalidUnitCost(f"{name} must be greater than zero, got {value}")

    def require_non_negative(self, name: str, value: float) -> None:
        if not math.isfinite(value) or value < 0:
            raise InvalidUnitCost(f"{name} cannot be negative, got {value}")

    def fit_count(self, available: float, item: float, spacing: float) -> int:
        """
        How many items of size `item` fit in `available` with `spacing` between them.
        (available + spacing) / (item + spacing), floored.
        """
        return int(math.floor((available + spacing) / (item + spacing) + FIT_TOLERANCE))

    def run_length(self, count: int, item: float, spacing: float) -> float:
        """Length of `count` items laid end to end with `spacing` between them."""
        if count <= 0:
            return 0.0
        return count * item + (count - 1) * spacing

    def inches_to_feet(self, inches: float) -> float:
        """Convert inches to feet."""
        return inches / self.INCHES_PER_FOOT

    def feet_to_inches(self, feet: float) -> float:
        """Convert feet to inches."""
        return feet * self.INCHES_PER_FOOT
