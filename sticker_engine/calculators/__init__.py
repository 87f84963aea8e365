"""
Deterministic layout and pricing calculators.

Pure Python math. No I/O.
Given a StickerSpec and roll / cost configuration, produce the roll layout,
production cost, customer price and margin for a sticker order.
"""
from .cost_aggregator import CostAggregator, compute_cost
from .layout_planner import RollLayoutPlanner, estimate_print_time, plan_layout
from .margin_reporter import compute_margin
from .price_calculator import CustomerPriceCalculator, quote
