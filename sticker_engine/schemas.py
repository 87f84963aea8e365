"""
Value types passed into and returned from the engine.

All models are frozen: every result is computed fresh from its inputs
and never mutated in place.
"""
from pydantic import BaseModel
from typing import Dict, List


class StickerSpec(BaseModel):
    width_inches: float
    height_inches: float
    quantity: int

    class Config:
        frozen = True

    @property
    def square_inches(self) -> float:
        return self.width_inches * self.height_inches


class MaterialRollSpec(BaseModel):
    roll_width_inches: float = 54.0
    roll_length_feet: float = 150.0
    margin_left_inches: float = 0.375
    margin_right_inches: float = 0.375
    inter_sticker_spacing_inches: float = 0.150
    max_section_length_inches: float = 42.0
    inter_section_gap_inches: float = 4.0
    trailing_allowance_inches: float = 4.0

    class Config:
        frozen = True

    @property
    def usable_width_inches(self) -> float:
        return self.roll_width_inches - self.margin_left_inches - self.margin_right_inches


class UnitCosts(BaseModel):
    vinyl_cost_per_roll: float
    laminate_cost_per_roll: float
    ink_cost_per_ml: float
    ink_ml_per_square_inch: float = 0.00403
    ink_overhead_multiplier: float = 1.2

    class Config:
        frozen = True


class PackagingPolicy(BaseModel):
    mailer_max_quantity: int = 300
    bubble_mailer_cost: float = 1.18
    box_cost: float = 0.50
    promo_item_cost: float = 0.20

    class Config:
        frozen = True


class BasePriceRow(BaseModel):
    square_inches: float
    base_price_per_sticker: float

    class Config:
        frozen = True


class QuantityDiscountRow(BaseModel):
    quantity: int
    discounts: Dict[float, float]  # square-inch breakpoint -> discount fraction

    class Config:
        frozen = True


class LayoutResult(BaseModel):
    stickers_per_row: int
    rows_per_section: int
    stickers_per_section: int
    full_sections: int
    remainder_stickers: int
    total_rows: int
    sections_needed: int
    total_length_inches: float
    total_length_feet: float
    length_whole_feet: int          # total length as feet + inches, for the shop floor
    length_extra_inches: float
    rolls_needed: float
    whole_rolls_needed: int
    feet_used_on_last_roll: float
    feet_left_on_last_roll: float   # offcut

    class Config:
        frozen = True


class PrintTimeEstimate(BaseModel):
    seconds: int
    minutes: float
    formatted: str

    class Config:
        frozen = True


class CostBreakdown(BaseModel):
    material_cost: float
    laminate_cost: float
    ink_cost: float
    ink_ml_used: float
    packaging_cost: float
    promo_item_cost: float
    total_cost: float
    cost_per_sticker: float

    class Config:
        frozen = True


class PriceQuote(BaseModel):
    quantity: int
    square_inches: float
    base_price_per_sticker: float
    discount_fraction: float
    rush_multiplier: float = 1.0
    final_price_per_sticker: float
    total_price: float

    class Config:
        frozen = True


class MarginReport(BaseModel):
    gross_profit: float
    raw_profit: float
    margin_percent: float
    profit_per_sticker: float
    is_loss: bool

    class Config:
        frozen = True


class MaterialOption(BaseModel):
    key: str
    label: str
    cost_per_roll: float


class MaterialCatalog(BaseModel):
    sticker_types: List[MaterialOption]
    vinyl: List[MaterialOption]
    laminate: List[MaterialOption]
