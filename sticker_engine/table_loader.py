"""
Loads the storefront price sheets from CSV and hands the engine a
validated PricingTable.

base-price.csv:
    Sq. Inches,Base Price
    1,$0.51
    ...

qty-sq.csv:
    Quantity,Square Inches,,,...
    ,1,4,9,16,...
    50,0,0,0,0,...
    "1,000",0.70,0.71,...
    * notes start with an asterisk

There is no built-in fallback sheet. A missing or unreadable file raises
PricingDataUnavailable.
"""

import csv
import io
import logging
import math
import os
from typing import List, Optional

from .config import settings
from .errors import PricingDataUnavailable
from .pricing_table import PricingTable
from .schemas import BasePriceRow, QuantityDiscountRow

logger = logging.getLogger(__name__)

BASE_PRICE_HEADER = "Sq. Inches"
QTY_DISCOUNT_HEADER = "Quantity"


def _parse_number(value: str) -> Optional[float]:
    """Parse '$1,234.50' / ' 9 ' style cells. Returns None for blanks, junk, nan and inf."""
    cleaned = str(value).replace("$", "").replace(",", "").strip()
    if not cleaned:
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_base_pricing(csv_text: str) -> List[BasePriceRow]:
    """Parse the base price sheet. Unparseable rows are skipped; result is sorted by area."""
    rows = []
    reader = csv.reader(io.StringIO(csv_text.strip()))
    next(reader, None)  # header
    for parts in reader:
        if len(parts) < 2:
            continue
        sq_in = _parse_number(parts[0])
        price = _parse_number(parts[1])
        if sq_in is None or price is None:
            continue
        rows.append(BasePriceRow(square_inches=sq_in, base_price_per_sticker=price))
    return sorted(rows, key=lambda r: r.square_inches)


def parse_quantity_discounts(csv_text: str) -> List[QuantityDiscountRow]:
    """
    Parse the quantity x square-inch discount grid.

    Row 1 is a title row, row 2 holds the square-inch breakpoints (first cell
    blank), and each following row is a quantity tier followed by one discount
    fraction per breakpoint. Quoted quantities like "1,000" are handled by the
    csv reader; rows starting with '*' are notes. A breakpoint cell that is
    not a number, or a fractional quantity, fails the whole sheet.
    """
    lines = list(csv.reader(io.StringIO(csv_text.strip())))
    if len(lines) < 3:
        return []

    # (cell position, breakpoint); blank cells are padding
    columns = []
    for position, cell in enumerate(lines[1][1:], start=1):
        if not cell.strip():
            continue
        sq_in = _parse_number(cell)
        if sq_in is None:
            raise PricingDataUnavailable(f"Square-inch breakpoint {cell!r} is not a number")
        columns.append((position, sq_in))

    rows = []
    for parts in lines[2:]:
        if not parts or parts[0].strip().startswith("*"):
            continue
        quantity = _parse_number(parts[0])
        if quantity is None or quantity <= 0:
            continue
        if not quantity.is_integer():
            raise PricingDataUnavailable(f"Quantity tier {parts[0]!r} is not a whole number")
        discounts = {}
        for position, sq_in in columns:
            fraction = _parse_number(parts[position]) if position < len(parts) else None
            if fraction is not None:
                discounts[sq_in] = fraction
        rows.append(QuantityDiscountRow(quantity=int(quantity), discounts=discounts))
    return sorted(rows, key=lambda r: r.quantity)


def _read(path: str) -> str:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise PricingDataUnavailable(f"Cannot read pricing sheet {path}: {e}") from e


def build_pricing_table(base_csv: str, discount_csv: str) -> PricingTable:
    """Parse both sheets from text and validate them into a PricingTable."""
    if not base_csv.strip() or not discount_csv.strip():
        raise PricingDataUnavailable("Pricing CSV files are empty")
    if BASE_PRICE_HEADER not in base_csv or QTY_DISCOUNT_HEADER not in discount_csv:
        raise PricingDataUnavailable("Pricing CSV files do not contain expected headers")

    base_rows = parse_base_pricing(base_csv)
    discount_rows = parse_quantity_discounts(discount_csv)
    if not base_rows or not discount_rows:
        raise PricingDataUnavailable("Failed to parse pricing CSV data: no valid entries found")
    return PricingTable(base_rows, discount_rows)


def load_pricing_table(base_path: Optional[str] = None,
                       discount_path: Optional[str] = None) -> PricingTable:
    """Load and validate the price sheets from disk (paths default to settings)."""
    base_path = base_path or settings.BASE_PRICE_CSV
    discount_path = discount_path or settings.QTY_DISCOUNT_CSV

    try:
        table = build_pricing_table(_read(base_path), _read(discount_path))
    except PricingDataUnavailable as e:
        logger.error("Pricing table rejected (%s, %s): %s",
                     os.path.basename(base_path), os.path.basename(discount_path), e)
        raise

    logger.info("Loaded pricing data: %d base rows, %d quantity tiers",
                len(table.base_rows), len(table.discount_rows))
    return table
