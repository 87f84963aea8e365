"""
Customer price calculator tests: base price x (1 - discount) x rush.

Tests:
1-3. Standard sizes and quantities
4-5. Between-tier quantities and non-tabulated sizes
6-7. Rush orders
8-9. Invalid input and missing price data
"""

import pytest

from sticker_engine.calculators.price_calculator import CustomerPriceCalculator, quote
from sticker_engine.errors import InvalidDimensions, PricingDataUnavailable
from sticker_engine.schemas import StickerSpec


def _spec(width=3.0, height=3.0, quantity=100):
    return StickerSpec(width_inches=width, height_inches=height, quantity=quantity)


def test_quote_three_inch_hundred(pricing_table):
    """9 sq in @ $1.40, 35% off at 100 → $0.91 each, $91 total."""
    q = quote(_spec(), pricing_table)
    assert q.square_inches == pytest.approx(9.0)
    assert q.base_price_per_sticker == pytest.approx(1.40)
    assert q.discount_fraction == pytest.approx(0.35)
    assert q.rush_multiplier == 1.0
    assert q.final_price_per_sticker == pytest.approx(0.91)
    assert q.total_price == pytest.approx(91.0)


def test_quote_below_smallest_tier_has_no_discount(pricing_table):
    q = quote(_spec(quantity=10), pricing_table)
    assert q.discount_fraction == 0.0
    assert q.final_price_per_sticker == pytest.approx(q.base_price_per_sticker)
    assert q.total_price == pytest.approx(14.0)


def test_quote_rectangular_sticker(pricing_table):
    """2" x 8" = 16 sq in, 500 units → $2.10 x 0.31."""
    q = quote(_spec(width=2.0, height=8.0, quantity=500), pricing_table)
    assert q.square_inches == pytest.approx(16.0)
    assert q.final_price_per_sticker == pytest.approx(2.10 * 0.31)


def test_quote_between_tiers_uses_lower_tier(pricing_table):
    q120 = quote(_spec(quantity=120), pricing_table)
    q100 = quote(_spec(quantity=100), pricing_table)
    assert q120.discount_fraction == q100.discount_fraction
    assert q120.final_price_per_sticker == pytest.approx(q100.final_price_per_sticker)
    assert q120.total_price == pytest.approx(q100.final_price_per_sticker * 120)


def test_quote_non_tabulated_size_rounds_up(pricing_table):
    """2.5" x 2.5" = 6.25 sq in: base from the 9 sq in row, discount from the 4 sq in column."""
    q = quote(_spec(width=2.5, height=2.5, quantity=100), pricing_table)
    assert q.base_price_per_sticker == pytest.approx(1.40)
    assert q.discount_fraction == pytest.approx(0.33)


def test_rush_order_adds_forty_percent(pricing_table):
    q = quote(_spec(), pricing_table, rush_order=True)
    assert q.rush_multiplier == pytest.approx(1.4)
    assert q.final_price_per_sticker == pytest.approx(0.91 * 1.4)
    assert q.total_price == pytest.approx(91.0 * 1.4)


def test_custom_rush_multiplier(pricing_table):
    calc = CustomerPriceCalculator(pricing_table, rush_multiplier=1.25)
    assert calc.quote(_spec(), rush_order=True).total_price == pytest.approx(91.0 * 1.25)
    assert calc.quote(_spec(), rush_order=False).total_price == pytest.approx(91.0)


@pytest.mark.parametrize("width,height,quantity", [(0, 3, 100), (3, -1, 100), (3, 3, 0)])
def test_quote_invalid_dimensions(pricing_table, width, height, quantity):
    with pytest.raises(InvalidDimensions):
        quote(_spec(width=width, height=height, quantity=quantity), pricing_table)


def test_quote_size_beyond_price_sheet(pricing_table):
    with pytest.raises(PricingDataUnavailable):
        quote(_spec(width=6.0, height=6.0), pricing_table)
