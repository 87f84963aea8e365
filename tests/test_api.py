"""
HTTP API tests: calculator endpoints through the FastAPI test client.

The `client` fixture serves the hand-built price sheets from conftest.py.
"""

from sticker_engine.errors import PricingDataUnavailable
from sticker_engine.routers import calculator
from sticker_engine.main import app


def _body(width=3.0, height=3.0, quantity=100, **extra):
    body = {"width_inches": width, "height_inches": height, "quantity": quantity}
    body.update(extra)
    return body


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "app": "sticker-engine"}


# ============================================================
# Quote
# ============================================================

def test_quote(client):
    resp = client.post("/api/calculator/quote", json=_body())
    assert resp.status_code == 200
    data = resp.json()
    assert abs(data["final_price_per_sticker"] - 0.91) < 1e-9
    assert abs(data["total_price"] - 91.0) < 1e-9
    assert data["rush_multiplier"] == 1.0


def test_quote_rush(client):
    resp = client.post("/api/calculator/quote", json=_body(rush_order=True))
    assert resp.status_code == 200
    assert abs(resp.json()["total_price"] - 91.0 * 1.4) < 1e-9


def test_quote_invalid_dimensions(client):
    resp = client.post("/api/calculator/quote", json=_body(width=0))
    assert resp.status_code == 422
    assert "width" in resp.json()["detail"]


def test_quote_missing_field(client):
    resp = client.post("/api/calculator/quote", json={"width_inches": 3, "height_inches": 3})
    assert resp.status_code == 422


def test_quote_size_not_on_sheet(client):
    resp = client.post("/api/calculator/quote", json=_body(width=6, height=6))
    assert resp.status_code == 503


def test_quote_without_price_sheets(client, monkeypatch):
    """A broken price sheet turns every price endpoint into a 503."""
    def broken():
        raise PricingDataUnavailable("Cannot read pricing sheet base-price.csv")

    app.dependency_overrides.pop(calculator.get_pricing_table)
    monkeypatch.setattr(calculator, "cached_pricing_table", broken)
    resp = client.post("/api/calculator/quote", json=_body())
    assert resp.status_code == 503
    assert "Cannot read" in resp.json()["detail"]


# ============================================================
# Layout and cost
# ============================================================

def test_layout(client):
    resp = client.post("/api/calculator/layout", json=_body())
    assert resp.status_code == 200
    data = resp.json()
    assert data["layout"]["stickers_per_row"] == 16
    assert data["layout"]["total_rows"] == 7
    assert data["print_time"]["formatted"] == "3 min 20 sec"


def test_layout_custom_roll(client):
    roll = {"roll_width_inches": 24.0, "margin_left_inches": 0.5, "margin_right_inches": 0.5}
    resp = client.post("/api/calculator/layout", json=_body(roll=roll))
    assert resp.status_code == 200
    # 23" usable: (23 + 0.15) / 3.15 → 7 across
    assert resp.json()["layout"]["stickers_per_row"] == 7


def test_layout_too_wide(client):
    resp = client.post("/api/calculator/layout", json=_body(width=54))
    assert resp.status_code == 422


def test_cost(client):
    resp = client.post("/api/calculator/cost", json=_body(width=2, height=2, quantity=250))
    assert resp.status_code == 200
    data = resp.json()
    assert abs(data["ink_ml_used"] - 4.03) < 1e-9
    assert data["packaging_cost"] == 1.18


def test_cost_unknown_laminate(client):
    resp = client.post("/api/calculator/cost", json=_body(laminate="gloss_wrap"))
    assert resp.status_code == 404
    assert "Unknown laminate" in resp.json()["detail"]


# ============================================================
# Job report and catalog
# ============================================================

def test_job(client):
    resp = client.post("/api/calculator/job", json=_body(sticker_type="holo"))
    assert resp.status_code == 200
    data = resp.json()
    assert data["sticker_type"] == "holo"
    assert data["unit_costs"]["vinyl_cost_per_roll"] == 719.95
    assert abs(data["quote"]["total_price"] - 91.0) < 1e-9
    assert data["layout"]["sections_needed"] == 1
    assert isinstance(data["assumptions"], list)


def test_job_unknown_sticker_type(client):
    resp = client.post("/api/calculator/job", json=_body(sticker_type="velvet"))
    assert resp.status_code == 404


def test_materials(client):
    resp = client.get("/api/calculator/materials")
    assert resp.status_code == 200
    data = resp.json()
    assert [o["key"] for o in data["sticker_types"]] == ["vinyl", "holo", "clear", "glitter", "economy"]
    assert {o["key"] for o in data["laminate"]} == {"gf_402_matte", "substance_3150"}


def test_pricing_summary(client):
    resp = client.get("/api/calculator/pricing-summary")
    assert resp.status_code == 200
    data = resp.json()
    assert data["quantities"] == [50, 100, 200, 500, 1000]
    assert data["square_inch_tiers"] == [1.0, 4.0, 9.0, 16.0]
    assert data["base_rows"] == 5
    assert data["summary"].startswith("Pricing data summary:")
