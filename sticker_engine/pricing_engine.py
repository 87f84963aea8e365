"""
Job pricing engine: runs the whole calculator for one sticker order.

Price (storefront tables) and cost (roll layout + materials) are computed
independently, then combined into a margin. Pure math, no I/O.

Input: StickerSpec + material selection
Output: job report dict (quote, layout, print time, cost, margin, assumptions)
"""

import logging
from typing import Optional

from .calculators.cost_aggregator import CostAggregator
from .calculators.layout_planner import RollLayoutPlanner, estimate_print_time
from .calculators.margin_reporter import compute_margin
from .calculators.material_lookup import DEFAULT_LAMINATE, DEFAULT_STICKER_TYPE, MaterialLookup
from .calculators.price_calculator import CustomerPriceCalculator
from .config import default_packaging, default_roll_spec
from .pricing_table import PricingTable
from .schemas import MaterialRollSpec, PackagingPolicy, StickerSpec

logger = logging.getLogger(__name__)


class JobPricingEngine:
    """
    Assembles the admin calculator report from the four calculators.
    Stateless apart from its configuration; safe to share between requests.
    """

    def __init__(self, table: PricingTable,
                 roll: Optional[MaterialRollSpec] = None,
                 packaging: Optional[PackagingPolicy] = None,
                 materials: Optional[MaterialLookup] = None):
        self.table = table
        self.roll = roll or default_roll_spec()
        self.packaging = packaging or default_packaging()
        self.materials = materials or MaterialLookup()
        self.planner = RollLayoutPlanner()
        self.costs = CostAggregator()
        self.pricer = CustomerPriceCalculator(table)

    def price_job(self, spec: StickerSpec,
                  sticker_type: str = DEFAULT_STICKER_TYPE,
                  laminate: str = DEFAULT_LAMINATE,
                  vinyl: Optional[str] = None,
                  rush_order: bool = False) -> dict:
        """
        Full report for one order.

        Returns:
            {
                "spec": StickerSpec,
                "sticker_type": str, "laminate": str,
                "quote": PriceQuote,
                "layout": LayoutResult,
                "print_time": PrintTimeEstimate,
                "unit_costs": UnitCosts,
                "cost": CostBreakdown,
                "margin": MarginReport,
                "assumptions": [str, ...],
            }
        """
        unit_costs = self.materials.unit_costs_for(sticker_type, laminate, vinyl=vinyl)

        price_quote = self.pricer.quote(spec, rush_order=rush_order)
        layout = self.planner.plan(spec, self.roll)
        cost = self.costs.compute(layout, spec, unit_costs, self.roll, self.packaging)
        margin = compute_margin(price_quote, cost)
        print_time = estimate_print_time(layout)

        logger.debug("Priced %dx %.2fx%.2f %s: $%.2f price, $%.2f cost",
                     spec.quantity, spec.width_inches, spec.height_inches,
                     sticker_type, price_quote.total_price, cost.total_cost)

        return {
            "spec": spec,
            "sticker_type": sticker_type,
            "laminate": laminate,
            "quote": price_quote,
            "layout": layout,
            "print_time": print_time,
            "unit_costs": unit_costs,
            "cost": cost,
            "margin": margin,
            "assumptions": self._build_assumptions(spec, layout, price_quote, margin),
        }

    def _build_assumptions(self, spec, layout, price_quote, margin) -> list:
        """Plain-language notes shown under the calculator results."""
        assumptions = [
            f"{layout.stickers_per_row} stickers fit across each row. "
            f"{layout.total_rows} row(s) across {layout.sections_needed} section(s) "
            f"print {spec.quantity} stickers.",
        ]

        if layout.sections_needed > 1:
            assumptions.append(
                f"Includes {layout.sections_needed - 1} x {self.roll.inter_section_gap_inches:g}\" "
                f"barcode gap(s) between sections."
            )

        assumptions.append(
            f"Flat {self.roll.trailing_allowance_inches:g}\" barcode allowance added once per job."
        )
        if layout.whole_rolls_needed > 1:
            # Allowance does not scale with rolls spanned; confirm with production
            assumptions.append(
                f"Job spans {layout.whole_rolls_needed} rolls "
                f"({layout.rolls_needed:.2f} rolls of material); "
                f"allowance not repeated per roll."
            )

        if price_quote.rush_multiplier != 1.0:
            assumptions.append(
                f"Rush order fee applied (x{price_quote.rush_multiplier:g})."
            )

        if margin.is_loss:
            assumptions.append(
                f"WARNING: price is below production cost by ${-margin.raw_profit:,.2f}."
            )

        return assumptions
