"""
Profit / margin reporter.

Clamp policy: gross_profit is floored at zero. The unclamped value is kept
in raw_profit and a loss-making job sets is_loss and logs a warning, so the
loss is visible even though the headline profit reads 0.
"""

import logging

from ..schemas import CostBreakdown, MarginReport, PriceQuote

logger = logging.getLogger(__name__)


def compute_margin(quote: PriceQuote, cost: CostBreakdown) -> MarginReport:
    raw_profit = quote.total_price - cost.total_cost
    gross_profit = max(0.0, raw_profit)
    is_loss = raw_profit < 0

    if is_loss:
        logger.warning(
            "Job priced below cost: qty %d, price $%.2f, cost $%.2f (loss $%.2f)",
            quote.quantity, quote.total_price, cost.total_cost, -raw_profit,
        )

    margin_percent = gross_profit / quote.total_price * 100 if quote.total_price > 0 else 0.0
    return MarginReport(
        gross_profit=gross_profit,
        raw_profit=raw_profit,
        margin_percent=margin_percent,
        profit_per_sticker=gross_profit / quote.quantity if quote.quantity > 0 else 0.0,
        is_loss=is_loss,
    )
