"""
Customer price calculator: storefront price for a sticker order.

base price (by area) x (1 - quantity discount) x rush multiplier, per sticker.
"""

from typing import Optional

from ..config import settings
from ..pricing_table import PricingTable
from ..schemas import PriceQuote, StickerSpec
from .base import BaseCalculator


class CustomerPriceCalculator(BaseCalculator):

    def __init__(self, table: PricingTable, rush_multiplier: Optional[float] = None):
        self.table = table
        self.rush_multiplier = settings.RUSH_MULTIPLIER if rush_multiplier is None else rush_multiplier

    def quote(self, spec: StickerSpec, rush_order: bool = False) -> PriceQuote:
        self.validate_sticker(spec)

        square_inches = spec.width_inches * spec.height_inches
        base_price = self.table.lookup_base_price(square_inches)
        discount = self.table.lookup_discount(spec.quantity, square_inches)
        multiplier = self.rush_multiplier if rush_order else 1.0

        final_price = base_price * (1 - discount) * multiplier
        return PriceQuote(
            quantity=spec.quantity,
            square_inches=square_inches,
            base_price_per_sticker=base_price,
            discount_fraction=discount,
            rush_multiplier=multiplier,
            final_price_per_sticker=final_price,
            total_price=final_price * spec.quantity,
        )


def quote(spec: StickerSpec, table: PricingTable, rush_order: bool = False) -> PriceQuote:
    return CustomerPriceCalculator(table).quote(spec, rush_order=rush_order)
