"""
Shared test fixtures: small hand-built price sheets, default roll, test client.
"""

import pytest
from fastapi.testclient import TestClient

from sticker_engine.main import app
from sticker_engine.pricing_table import PricingTable
from sticker_engine.routers.calculator import get_pricing_table
from sticker_engine.schemas import (
    BasePriceRow, MaterialRollSpec, PackagingPolicy, QuantityDiscountRow, UnitCosts,
)


def _base_rows():
    """1-25 sq in, $0.50 + $0.10 per sq in (9 sq in = $1.40)."""
    return [
        BasePriceRow(square_inches=float(sq), base_price_per_sticker=round(0.50 + 0.10 * sq, 2))
        for sq in (1, 4, 9, 16, 25)
    ]


def _discount_rows():
    """Quantity tiers 50 (no discount) through 1000, columns 1/4/9/16 sq in."""
    return [
        QuantityDiscountRow(quantity=50, discounts={1: 0.0, 4: 0.0, 9: 0.0, 16: 0.0}),
        QuantityDiscountRow(quantity=100, discounts={1: 0.30, 4: 0.33, 9: 0.35, 16: 0.37}),
        QuantityDiscountRow(quantity=200, discounts={1: 0.48, 4: 0.51, 9: 0.54, 16: 0.55}),
        QuantityDiscountRow(quantity=500, discounts={1: 0.62, 4: 0.65, 9: 0.68, 16: 0.69}),
        QuantityDiscountRow(quantity=1000, discounts={1: 0.69, 4: 0.72, 9: 0.74, 16: 0.75}),
    ]


@pytest.fixture
def base_rows():
    return _base_rows()


@pytest.fixture
def discount_rows():
    return _discount_rows()


@pytest.fixture
def pricing_table():
    return PricingTable(_base_rows(), _discount_rows())


@pytest.fixture
def roll():
    """Production roll: 54" x 150', 53.25" usable, 0.15" spacing, 42" sections."""
    return MaterialRollSpec()


@pytest.fixture
def unit_costs():
    return UnitCosts(
        vinyl_cost_per_roll=189.95,
        laminate_cost_per_roll=237.50,
        ink_cost_per_ml=286.0 / 1497.0,
        ink_ml_per_square_inch=0.00403,
        ink_overhead_multiplier=1.2,
    )


@pytest.fixture
def packaging():
    return PackagingPolicy()


@pytest.fixture
def client(pricing_table):
    """FastAPI test client wired to the hand-built price sheets."""
    app.dependency_overrides[get_pricing_table] = lambda: pricing_table
    yield TestClient(app)
    app.dependency_overrides.clear()
