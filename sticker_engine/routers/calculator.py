"""
Material cost calculator API.

POST /api/calculator/quote            storefront price for a size + quantity
POST /api/calculator/layout           roll layout + print time
POST /api/calculator/cost             production cost for a material selection
POST /api/calculator/job              full report: price, layout, cost, margin
GET  /api/calculator/materials        sticker types, vinyl and laminate catalog
GET  /api/calculator/pricing-summary  loaded price sheet summary
"""

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..calculators.cost_aggregator import compute_cost
from ..calculators.layout_planner import RollLayoutPlanner, estimate_print_time
from ..calculators.material_lookup import DEFAULT_LAMINATE, DEFAULT_STICKER_TYPE, MaterialLookup
from ..calculators.price_calculator import CustomerPriceCalculator
from ..config import default_packaging, default_roll_spec
from ..errors import PricingDataUnavailable, PricingEngineError
from ..pricing_engine import JobPricingEngine
from ..pricing_table import PricingTable
from ..schemas import (
    CostBreakdown, LayoutResult, MaterialCatalog, MaterialRollSpec,
    PriceQuote, PrintTimeEstimate, StickerSpec,
)
from ..table_loader import load_pricing_table

router = APIRouter(prefix="/calculator", tags=["calculator"])


# --- Dependencies ---

@lru_cache(maxsize=1)
def cached_pricing_table() -> PricingTable:
    """Price sheets are loaded once per process from the configured CSVs."""
    return load_pricing_table()


def get_pricing_table() -> PricingTable:
    try:
        return cached_pricing_table()
    except PricingDataUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


def get_material_lookup() -> MaterialLookup:
    return MaterialLookup()


def _raise_http(e: PricingEngineError):
    if isinstance(e, PricingDataUnavailable):
        raise HTTPException(status_code=503, detail=str(e))
    raise HTTPException(status_code=422, detail=str(e))


# --- Request/Response schemas ---

class QuoteRequest(StickerSpec):
    rush_order: bool = False


class LayoutRequest(StickerSpec):
    roll: Optional[MaterialRollSpec] = None


class LayoutResponse(BaseModel):
    layout: LayoutResult
    print_time: PrintTimeEstimate


class CostRequest(StickerSpec):
    sticker_type: str = DEFAULT_STICKER_TYPE
    laminate: str = DEFAULT_LAMINATE
    vinyl: Optional[str] = None


class JobRequest(CostRequest):
    rush_order: bool = False


# --- Endpoints ---

@router.post("/quote", response_model=PriceQuote)
def quote_price(request: QuoteRequest, table: PricingTable = Depends(get_pricing_table)):
    spec = StickerSpec(width_inches=request.width_inches,
                       height_inches=request.height_inches,
                       quantity=request.quantity)
    try:
        return CustomerPriceCalculator(table).quote(spec, rush_order=request.rush_order)
    except PricingEngineError as e:
        _raise_http(e)


@router.post("/layout", response_model=LayoutResponse)
def plan_roll_layout(request: LayoutRequest):
    spec = StickerSpec(width_inches=request.width_inches,
                       height_inches=request.height_inches,
                       quantity=request.quantity)
    try:
        layout = RollLayoutPlanner().plan(spec, request.roll or default_roll_spec())
    except PricingEngineError as e:
        _raise_http(e)
    return LayoutResponse(layout=layout, print_time=estimate_print_time(layout))


@router.post("/cost", response_model=CostBreakdown)
def production_cost(request: CostRequest, materials: MaterialLookup = Depends(get_material_lookup)):
    spec = StickerSpec(width_inches=request.width_inches,
                       height_inches=request.height_inches,
                       quantity=request.quantity)
    try:
        unit_costs = materials.unit_costs_for(request.sticker_type, request.laminate,
                                              vinyl=request.vinyl)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    roll = default_roll_spec()
    try:
        layout = RollLayoutPlanner().plan(spec, roll)
        return compute_cost(layout, spec, unit_costs, roll, default_packaging())
    except PricingEngineError as e:
        _raise_http(e)


@router.post("/job")
def price_job(request: JobRequest,
              table: PricingTable = Depends(get_pricing_table),
              materials: MaterialLookup = Depends(get_material_lookup)):
    """
    Full admin calculator report.

    Returns the job report from JobPricingEngine with every model dumped
    to plain JSON.
    """
    spec = StickerSpec(width_inches=request.width_inches,
                       height_inches=request.height_inches,
                       quantity=request.quantity)
    engine = JobPricingEngine(table, materials=materials)
    try:
        report = engine.price_job(spec, sticker_type=request.sticker_type,
                                  laminate=request.laminate, vinyl=request.vinyl,
                                  rush_order=request.rush_order)
    except PricingEngineError as e:
        _raise_http(e)
    except ValueError as e:
        # Unknown sticker type / vinyl / laminate key
        raise HTTPException(status_code=404, detail=str(e))

    return {
        key: value.model_dump() if isinstance(value, BaseModel) else value
        for key, value in report.items()
    }


@router.get("/materials", response_model=MaterialCatalog)
def list_materials(materials: MaterialLookup = Depends(get_material_lookup)):
    return materials.catalog()


@router.get("/pricing-summary")
def pricing_summary(table: PricingTable = Depends(get_pricing_table)):
    return {
        "quantities": table.available_quantities(),
        "square_inch_tiers": table.available_square_inches(),
        "base_rows": len(table.base_rows),
        "summary": table.summary(),
    }
