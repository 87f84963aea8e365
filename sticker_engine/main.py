from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .errors import PricingDataUnavailable
from .routers import calculator

logger = logging.getLogger("sticker_engine")

app = FastAPI(
    title=settings.APP_NAME,
    description="Roll layout, material cost and storefront pricing for sticker orders",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(calculator.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "sticker-engine"}


@app.on_event("startup")
def warm_pricing_table():
    """Load the price sheets at startup so a broken sheet shows up in the logs immediately."""
    try:
        table = calculator.cached_pricing_table()
        logger.info("Pricing table ready: %d quantity tiers", len(table.available_quantities()))
    except PricingDataUnavailable as e:
        # Quote endpoints answer 503 until the sheet is fixed
        logger.error("Pricing table unavailable at startup: %s", e)
