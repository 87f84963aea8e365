"""
Roll material price lookup with fallback chain:
1. Overrides from data/material_prices.json (current supplier invoices)
2. Catalog prices from this file

All prices are per roll (54" x 150').
"""

import json
import logging
import math
from typing import Dict, List, Optional

from ..config import default_unit_costs, settings
from ..schemas import MaterialCatalog, MaterialOption, UnitCosts

logger = logging.getLogger(__name__)

# Sticker type -> default vinyl stock
STICKER_TYPES = {
    "vinyl": {"label": "Vinyl (Matte/Gloss)", "vinyl": "substance_3750"},
    "holo": {"label": "Holographic", "vinyl": "substance_2755_holo"},
    "clear": {"label": "Clear", "vinyl": "substance_2750_clear"},
    "glitter": {"label": "Glitter", "vinyl": "glitter"},
    "economy": {"label": "Economy", "vinyl": "substance_em3_economy"},
}

# CATALOG PRICES: used when no override exists for a stock
VINYL_CATALOG = {
    "substance_3750": {"label": "Substance 3750 Matte/Gloss Vinyl", "cost_per_roll": 189.95},
    "substance_2755_holo": {"label": "Substance 2755 Holographic Vinyl", "cost_per_roll": 719.95},
    "substance_2750_clear": {"label": "Substance 2750 Clear Vinyl", "cost_per_roll": 199.95},
    "glitter": {"label": "Glitter Vinyl", "cost_per_roll": 249.95},
    "substance_em3_economy": {"label": "Substance EM3 Economy Gloss Vinyl", "cost_per_roll": 149.95},
}

LAMINATE_CATALOG = {
    "gf_402_matte": {"label": "General Formulations 402 Matte", "cost_per_roll": 237.50},
    "substance_3150": {"label": "Substance 3150 Matte/Gloss", "cost_per_roll": 199.95},
}

DEFAULT_STICKER_TYPE = "vinyl"
DEFAULT_LAMINATE = "gf_402_matte"


def _clean_prices(section: str, entries) -> Dict[str, float]:
    """Keep override prices that are positive numbers; log and drop the rest."""
    if not isinstance(entries, dict):
        logger.warning("Ignoring material overrides for %s: expected an object", section)
        return {}
    prices = {}
    for key, value in entries.items():
        try:
            price = float(value)
        except (TypeError, ValueError):
            price = None
        if price is None or not math.isfinite(price) or price <= 0:
            logger.warning("Ignoring %s override %s=%r: not a positive price", section, key, value)
            continue
        prices[key] = price
    return prices


def _load_overrides(path: str) -> Dict[str, Dict[str, float]]:
    try:
        with open(path) as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}  # No overrides; use catalog
    if not isinstance(data, dict):
        logger.warning("Ignoring material overrides in %s: expected an object", path)
        return {}
    logger.info("Loaded material price overrides from %s", path)
    return {
        section: _clean_prices(section, data.get(section, {}))
        for section in ("vinyl", "laminate")
    }


class MaterialLookup:
    """Resolves vinyl and laminate cost per roll for a sticker order."""

    def __init__(self, overrides_path: Optional[str] = None):
        overrides = _load_overrides(overrides_path or settings.MATERIAL_PRICES_JSON)
        self._vinyl_overrides = overrides.get("vinyl", {})
        self._laminate_overrides = overrides.get("laminate", {})

    def get_sticker_type(self, sticker_type: str) -> dict:
        if sticker_type not in STICKER_TYPES:
            raise ValueError(
                f"Unknown sticker type: {sticker_type}. "
                f"Available: {list(STICKER_TYPES.keys())}"
            )
        return STICKER_TYPES[sticker_type]

    def get_vinyl_cost(self, vinyl_key: str) -> float:
        """Cost per roll for a vinyl stock. Override first, then catalog."""
        if vinyl_key not in VINYL_CATALOG:
            raise ValueError(
                f"Unknown vinyl stock: {vinyl_key}. Available: {list(VINYL_CATALOG.keys())}"
            )
        if vinyl_key in self._vinyl_overrides:
            return self._vinyl_overrides[vinyl_key]
        return VINYL_CATALOG[vinyl_key]["cost_per_roll"]

    def get_laminate_cost(self, laminate_key: str) -> float:
        if laminate_key not in LAMINATE_CATALOG:
            raise ValueError(
                f"Unknown laminate: {laminate_key}. Available: {list(LAMINATE_CATALOG.keys())}"
            )
        if laminate_key in self._laminate_overrides:
            return self._laminate_overrides[laminate_key]
        return LAMINATE_CATALOG[laminate_key]["cost_per_roll"]

    def unit_costs_for(self, sticker_type: str = DEFAULT_STICKER_TYPE,
                       laminate: str = DEFAULT_LAMINATE,
                       vinyl: Optional[str] = None) -> UnitCosts:
        """
        Build UnitCosts for an order. `vinyl` overrides the sticker type's
        default stock (e.g. economy vinyl cut as a standard sticker).
        """
        vinyl_key = vinyl or self.get_sticker_type(sticker_type)["vinyl"]
        return default_unit_costs(
            vinyl_cost_per_roll=self.get_vinyl_cost(vinyl_key),
            laminate_cost_per_roll=self.get_laminate_cost(laminate),
        )

    def catalog(self) -> MaterialCatalog:
        """Full catalog with override prices applied, for the admin calculator."""
        return MaterialCatalog(
            sticker_types=self._options(
                {k: {"label": v["label"], "cost_per_roll": self.get_vinyl_cost(v["vinyl"])}
                 for k, v in STICKER_TYPES.items()}
            ),
            vinyl=self._options(
                {k: {"label": v["label"], "cost_per_roll": self.get_vinyl_cost(k)}
                 for k, v in VINYL_CATALOG.items()}
            ),
            laminate=self._options(
                {k: {"label": v["label"], "cost_per_roll": self.get_laminate_cost(k)}
                 for k, v in LAMINATE_CATALOG.items()}
            ),
        )

    def _options(self, entries: dict) -> List[MaterialOption]:
        return [
            MaterialOption(key=key, label=e["label"], cost_per_roll=e["cost_per_roll"])
            for key, e in entries.items()
        ]
