"""
Pricing table accessor: base price by area and quantity discount by
(quantity tier x square-inch breakpoint).

Pure data access. The table validates itself on construction and raises
PricingDataUnavailable for empty or malformed sheets.

Resolution policy:
    base price:  exact row, else the next larger tabulated area (ceiling)
    quantity:    largest tier <= quantity (120 units gets the 100 tier)
    area column: largest breakpoint <= area
"""

import bisect
import math
from functools import lru_cache
from typing import List, Sequence

from .errors import PricingDataUnavailable
from .schemas import BasePriceRow, QuantityDiscountRow


class PricingTable:
    """Validated, read-only view over the two storefront price sheets."""

    def __init__(self, base_rows: Sequence[BasePriceRow],
                 discount_rows: Sequence[QuantityDiscountRow]):
        self._base_rows = tuple(base_rows)
        self._discount_rows = tuple(discount_rows)
        self._validate_base_rows()
        self._validate_discount_rows()

        self._base_areas = [row.square_inches for row in self._base_rows]
        self._quantities = [row.quantity for row in self._discount_rows]
        self._breakpoints = sorted(self._discount_rows[0].discounts.keys())

        # Per-instance caches; the table never changes after construction
        self.lookup_base_price = lru_cache(maxsize=1024)(self._lookup_base_price)
        self.lookup_discount = lru_cache(maxsize=4096)(self._lookup_discount)

    # --- Validation ---

    def _validate_base_rows(self):
        if not self._base_rows:
            raise PricingDataUnavailable("Base price table is empty")
        previous = None
        for row in self._base_rows:
            if not (math.isfinite(row.square_inches) and math.isfinite(row.base_price_per_sticker)):
                raise PricingDataUnavailable(
                    f"Base price row has a non-numeric value: {row.square_inches} sq in"
                )
            if row.base_price_per_sticker <= 0:
                raise PricingDataUnavailable(
                    f"Base price for {row.square_inches} sq in must be positive, "
                    f"got {row.base_price_per_sticker}"
                )
            if previous is not None and row.square_inches <= previous:
                raise PricingDataUnavailable(
                    f"Base price table not strictly ascending at {row.square_inches} sq in"
                )
            previous = row.square_inches

    def _validate_discount_rows(self):
        if not self._discount_rows:
            raise PricingDataUnavailable("Quantity discount table is empty")

        columns = set(self._discount_rows[0].discounts.keys())
        if not columns:
            raise PricingDataUnavailable(
                f"Quantity tier {self._discount_rows[0].quantity} has no square-inch columns"
            )
        for sq_in in columns:
            if not math.isfinite(sq_in) or sq_in <= 0:
                raise PricingDataUnavailable(
                    f"Square-inch breakpoint must be a positive number, got {sq_in}"
                )

        previous = None
        for row in self._discount_rows:
            if row.quantity < 1:
                raise PricingDataUnavailable(f"Quantity tier must be >= 1, got {row.quantity}")
            if previous is not None and row.quantity <= previous.quantity:
                raise PricingDataUnavailable(
                    f"Quantity discount table not strictly ascending at {row.quantity}"
                )
            if set(row.discounts.keys()) != columns:
                missing = sorted(columns - set(row.discounts.keys()))
                extra = sorted(set(row.discounts.keys()) - columns)
                raise PricingDataUnavailable(
                    f"Quantity tier {row.quantity} has mismatched columns "
                    f"(missing {missing}, extra {extra})"
                )
            for sq_in, fraction in row.discounts.items():
                if not (0.0 <= fraction < 1.0):
                    raise PricingDataUnavailable(
                        f"Discount {fraction} at qty {row.quantity}, {sq_in} sq in "
                        f"is outside [0, 1)"
                    )
                if previous is not None and fraction < previous.discounts[sq_in]:
                    raise PricingDataUnavailable(
                        f"Discount inversion at {sq_in} sq in: qty {row.quantity} "
                        f"gets {fraction}, qty {previous.quantity} gets "
                        f"{previous.discounts[sq_in]}"
                    )
            previous = row

    # --- Lookups ---

    def _lookup_base_price(self, square_inches: float) -> float:
        """Base price per sticker for an area, rounding up to the next tabulated row."""
        idx = bisect.bisect_left(self._base_areas, square_inches)
        if idx >= len(self._base_rows):
            raise PricingDataUnavailable(
                f"No base price tabulated for {square_inches:.2f} sq in "
                f"(largest row is {self._base_areas[-1]} sq in)"
            )
        return self._base_rows[idx].base_price_per_sticker

    def _lookup_discount(self, quantity: int, square_inches: float) -> float:
        """Discount fraction for the quantity tier at or below `quantity`."""
        tier_idx = bisect.bisect_right(self._quantities, quantity) - 1
        row = self._discount_rows[max(tier_idx, 0)]

        col_idx = bisect.bisect_right(self._breakpoints, square_inches) - 1
        column = self._breakpoints[max(col_idx, 0)]
        return row.discounts[column]

    # --- Introspection ---

    @property
    def base_rows(self) -> List[BasePriceRow]:
        return list(self._base_rows)

    @property
    def discount_rows(self) -> List[QuantityDiscountRow]:
        return list(self._discount_rows)

    def available_quantities(self) -> List[int]:
        return list(self._quantities)

    def available_square_inches(self) -> List[float]:
        return list(self._breakpoints)

    def summary(self) -> str:
        """Human-readable summary of the loaded sheets, for logs and the admin API."""
        lines = [
            "Pricing data summary:",
            f"Base pricing: {len(self._base_rows)} entries "
            f"({self._base_areas[0]:g} to {self._base_areas[-1]:g} sq in)",
            f"Quantity discounts: {len(self._discount_rows)} quantity tiers",
            f"Available quantities: {', '.join(str(q) for q in self._quantities)}",
            f"Square inch tiers: {', '.join(f'{b:g}' for b in self._breakpoints)}",
        ]
        return "\n".join(lines)
