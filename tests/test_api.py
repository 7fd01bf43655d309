"""API tests using FastAPI's TestClient"""

import importlib
import logging

import pytest
from fastapi.testclient import TestClient

import src.api.app as app_module
from src.api.app import app
from src.pricing.config import RATE_TABLE_VERSION
from src.pricing.exceptions import InvalidInputError


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def body() -> dict:
    return {
        "property_value": 25000,
        "location": "CA",
        "dwelling_type": "apartment",
        "coverage_tier": "standard",
        "deductible": 500,
    }


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "table_version": RATE_TABLE_VERSION}


def test_options(client):
    data = client.get("/options").json()

    assert len(data["locations"]) == 51
    assert data["deductibles"] == [250, 500, 1000, 2500]
    assert [d["value"] for d in data["dwelling_types"]] == ["apartment", "condo", "house", "townhouse"]
    assert data["coverage_tiers"][1] == {"value": "standard", "label": "Standard (Recommended)"}
    assert data["property_value"] == {"min": 5000, "max": 200000, "step": 1000}


def test_quote_reference_scenario(client, body):
    response = client.post("/quote", json=body)

    assert response.status_code == 200
    data = response.json()
    assert data["quote"]["annual_cost"] == 242
    assert data["quote"]["monthly_cost"] == 20
    assert data["display"]["monthly_cost"] == "$20"
    assert data["table_version"] == RATE_TABLE_VERSION
    assert data["warnings"] == []
    assert data["comparison"] is None
    assert len(data["quote"]["feature_matrix"]) == 6


def test_quote_defaults_match_form(client):
    response = client.post("/quote", json={})

    assert response.status_code == 200
    assert response.json()["quote"]["annual_cost"] == 242


def test_quote_high_risk_state_with_comparison(client, body):
    body.update(location="la", include_comparison=True)
    data = client.post("/quote", json=body).json()

    assert data["input"]["location"] == "LA"
    assert data["quote"]["annual_cost"] == 305
    assert data["quote"]["monthly_cost"] == 25
    assert data["comparison"]["standard"] == {"annual_cost": 305, "monthly_cost": 25}


@pytest.mark.parametrize(
    "changes",
    [
        {"property_value": 4000},
        {"property_value": 201000},
        {"property_value": 25500},
        {"location": "ZZ"},
        {"dwelling_type": "castle"},
        {"coverage_tier": "gold"},
        {"deductible": 750},
    ],
)
def test_quote_rejects_out_of_contract_input(client, body, changes):
    body.update(changes)
    response = client.post("/quote", json=body)

    assert response.status_code == 422


def test_compare(client, body):
    response = client.post("/compare", json=body)

    assert response.status_code == 200
    data = response.json()
    assert data["tiers"] == ["basic", "standard", "premium"]
    assert data["prices"]["basic"] == {"annual_cost": 169, "monthly_cost": 14}
    assert data["prices"]["premium"] == {"annual_cost": 338, "monthly_cost": 28}
    assert data["features"][0] == {"label": "Personal Property", "basic": True, "standard": True, "premium": True}
    assert data["features"][-1] == {
        "label": "Identity Theft Protection",
        "basic": False,
        "standard": False,
        "premium": True,
    }


def test_lambda_handler_wraps_app():
    from mangum import Mangum

    from src.api.lambda_handler import handler

    assert isinstance(handler, Mangum)


def test_engine_rejection_maps_to_422(client, body, monkeypatch):
    def reject(*args, **kwargs):
        raise InvalidInputError("deductible must be one of [250, 500, 1000, 2500]; got 750")

    monkeypatch.setattr(app_module, "quote_from_input", reject)
    response = client.post("/quote", json=body)

    assert response.status_code == 422
    assert response.json() == {"detail": "deductible must be one of [250, 500, 1000, 2500]; got 750"}


def test_import_leaves_root_logging_alone():
    root = logging.getLogger()
    sentinel = logging.NullHandler()
    root.addHandler(sentinel)
    try:
        importlib.reload(app_module)
        assert sentinel in root.handlers
    finally:
        root.removeHandler(sentinel)


def test_startup_configures_logging(monkeypatch):
    levels = []
    monkeypatch.setattr(app_module, "setup_logging", levels.append)

    with TestClient(app_module.app) as started:
        assert started.get("/health").status_code == 200

    assert levels == [app_module.CONFIG.log_level]
