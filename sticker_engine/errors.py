"""
Typed failures for the layout and pricing engine.

Every error is scoped to a single calculation call. Nothing is retried:
the math is deterministic, so the caller fixes the input and recomputes.
"""


class PricingEngineError(ValueError):
    """Base class for all engine failures."""


class InvalidDimensions(PricingEngineError):
    """Width/height <= 0 or non-finite, quantity < 1, or unusable roll geometry."""


class StickerTooWide(PricingEngineError):
    """Not a single sticker fits across the usable roll width."""


class StickerTooTall(PricingEngineError):
    """Not a single row fits in the maximum print-section length."""


class PricingDataUnavailable(PricingEngineError):
    """Pricing tables are missing, empty, or malformed."""


class InvalidUnitCost(PricingEngineError):
    """A configured material, ink or packaging cost is out of range."""
