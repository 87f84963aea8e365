import os
from typing import Optional

from pydantic_settings import BaseSettings

from .schemas import MaterialRollSpec, PackagingPolicy, UnitCosts

_DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")


class Settings(BaseSettings):
    APP_NAME: str = "Sticker Roll Pricing Engine"

    # Pricing tables (CSV exports of the storefront price sheet)
    BASE_PRICE_CSV: str = os.path.join(_DATA_DIR, "base-price.csv")
    QTY_DISCOUNT_CSV: str = os.path.join(_DATA_DIR, "qty-sq.csv")
    MATERIAL_PRICES_JSON: str = os.path.join(_DATA_DIR, "material_prices.json")

    # Roll geometry: 54" x 150' roll, 53.25" printable
    ROLL_WIDTH_INCHES: float = 54.0
    ROLL_LENGTH_FEET: float = 150.0
    MARGIN_LEFT_INCHES: float = 0.375
    MARGIN_RIGHT_INCHES: float = 0.375
    STICKER_SPACING_INCHES: float = 0.150
    MAX_SECTION_LENGTH_INCHES: float = 42.0
    SECTION_GAP_INCHES: float = 4.0        # barcode gap between sections
    TRAILING_ALLOWANCE_INCHES: float = 4.0  # once per job

    # Unit costs
    VINYL_COST_PER_ROLL: float = 189.95
    LAMINATE_COST_PER_ROLL: float = 237.50
    INK_CARTRIDGE_COST: float = 286.00
    INK_CARTRIDGE_ML: float = 1497.0
    INK_ML_PER_SQ_INCH: float = 0.00403    # 250 @ 2"x2" = 4.03 ml
    INK_OVERHEAD_MULTIPLIER: float = 1.2   # purge + waste

    # Packaging
    MAILER_MAX_QUANTITY: int = 300
    BUBBLE_MAILER_COST: float = 1.18
    BOX_COST: float = 0.50
    PROMO_ITEM_COST: float = 0.20

    RUSH_MULTIPLIER: float = 1.4
    PRINT_SECONDS_PER_SECTION: int = 200   # 3 min 20 sec per 42" section

    class Config:
        env_file = ".env"


settings = Settings()


def default_roll_spec() -> MaterialRollSpec:
    """Roll geometry from settings."""
    return MaterialRollSpec(
        roll_width_inches=settings.ROLL_WIDTH_INCHES,
        roll_length_feet=settings.ROLL_LENGTH_FEET,
        margin_left_inches=settings.MARGIN_LEFT_INCHES,
        margin_right_inches=settings.MARGIN_RIGHT_INCHES,
        inter_sticker_spacing_inches=settings.STICKER_SPACING_INCHES,
        max_section_length_inches=settings.MAX_SECTION_LENGTH_INCHES,
        inter_section_gap_inches=settings.SECTION_GAP_INCHES,
        trailing_allowance_inches=settings.TRAILING_ALLOWANCE_INCHES,
    )


def default_unit_costs(vinyl_cost_per_roll: Optional[float] = None,
                       laminate_cost_per_roll: Optional[float] = None) -> UnitCosts:
    """Unit costs from settings, optionally overriding the per-roll costs."""
    return UnitCosts(
        vinyl_cost_per_roll=(settings.VINYL_COST_PER_ROLL
                             if vinyl_cost_per_roll is None else vinyl_cost_per_roll),
        laminate_cost_per_roll=(settings.LAMINATE_COST_PER_ROLL
                                if laminate_cost_per_roll is None else laminate_cost_per_roll),
        ink_cost_per_ml=settings.INK_CARTRIDGE_COST / settings.INK_CARTRIDGE_ML,
        ink_ml_per_square_inch=settings.INK_ML_PER_SQ_INCH,
        ink_overhead_multiplier=settings.INK_OVERHEAD_MULTIPLIER,
    )


def default_packaging() -> PackagingPolicy:
    return PackagingPolicy(
        mailer_max_quantity=settings.MAILER_MAX_QUANTITY,
        bubble_mailer_cost=settings.BUBBLE_MAILER_COST,
        box_cost=settings.BOX_COST,
        promo_item_cost=settings.PROMO_ITEM_COST,
    )
