"""
Cost aggregator: production cost of a planned job.

Material and laminate are charged by the linear feet the layout consumes,
ink by printed area, packaging by a fixed catalog of shipping SKUs.

Output: CostBreakdown
    material_cost     vinyl feet x (cost per roll / roll length)
    laminate_cost     same feet x (laminate cost per roll / roll length)
    ink_ml_used       total sq in x ml per sq in
    ink_cost          ml x $/ml x overhead multiplier (purge + waste)
    packaging_cost    bubble mailer up to the threshold, box above it
    promo_item_cost   fixed per-order freebie
    total_cost        sum of the above
    cost_per_sticker  total_cost / quantity
"""

from typing import Optional

from ..config import default_packaging, default_roll_spec
from ..errors import InvalidDimensions
from ..schemas import CostBreakdown, LayoutResult, MaterialRollSpec, PackagingPolicy, StickerSpec, UnitCosts
from .base import BaseCalculator


class CostAggregator(BaseCalculator):

    def validate_costs(self, unit_costs: UnitCosts, packaging: PackagingPolicy) -> None:
        self.require_positive("Vinyl cost per roll", unit_costs.vinyl_cost_per_roll)
        self.require_positive("Laminate cost per roll", unit_costs.laminate_cost_per_roll)
        self.require_non_negative("Ink cost per ml", unit_costs.ink_cost_per_ml)
        self.require_non_negative("Ink ml per sq in", unit_costs.ink_ml_per_square_inch)
        self.require_positive("Ink overhead multiplier", unit_costs.ink_overhead_multiplier)
        self.require_non_negative("Bubble mailer cost", packaging.bubble_mailer_cost)
        self.require_non_negative("Box cost", packaging.box_cost)
        self.require_non_negative("Promo item cost", packaging.promo_item_cost)

    def packaging_cost(self, quantity: int, packaging: PackagingPolicy) -> float:
        """Step function: mailer at or below the threshold, box above it."""
        if quantity <= packaging.mailer_max_quantity:
            return packaging.bubble_mailer_cost
        return packaging.box_cost

    def compute(self, layout: LayoutResult, spec: StickerSpec, unit_costs: UnitCosts,
                roll: MaterialRollSpec, packaging: PackagingPolicy) -> CostBreakdown:
        self.validate_sticker(spec)
        self.validate_costs(unit_costs, packaging)
        if roll.roll_length_feet <= 0:
            raise InvalidDimensions(f"Roll length must be positive, got {roll.roll_length_feet}")

        material_cost_per_foot = unit_costs.vinyl_cost_per_roll / roll.roll_length_feet
        laminate_cost_per_foot = unit_costs.laminate_cost_per_roll / roll.roll_length_feet
        material_cost = layout.total_length_feet * material_cost_per_foot
        laminate_cost = layout.total_length_feet * laminate_cost_per_foot

        total_square_inches = spec.width_inches * spec.height_inches * spec.quantity
        ink_ml = total_square_inches * unit_costs.ink_ml_per_square_inch
        ink_cost = ink_ml * unit_costs.ink_cost_per_ml * unit_costs.ink_overhead_multiplier

        packaging_cost = self.packaging_cost(spec.quantity, packaging)

        total_cost = (
            material_cost + laminate_cost + ink_cost
            + packaging_cost + packaging.promo_item_cost
        )
        return CostBreakdown(
            material_cost=material_cost,
            laminate_cost=laminate_cost,
            ink_cost=ink_cost,
            ink_ml_used=ink_ml,
            packaging_cost=packaging_cost,
            promo_item_cost=packaging.promo_item_cost,
            total_cost=total_cost,
            cost_per_sticker=total_cost / spec.quantity,
        )


def compute_cost(layout: LayoutResult, spec: StickerSpec, unit_costs: UnitCosts,
                 roll: Optional[MaterialRollSpec] = None,
                 packaging: Optional[PackagingPolicy] = None) -> CostBreakdown:
    return CostAggregator().compute(
        layout, spec, unit_costs,
        roll or default_roll_spec(),
        packaging or default_packaging(),
    )
