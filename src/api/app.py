# src/api/app.py
"""
FastAPI service for the renters insurance estimator.

Endpoints:
- GET  /health
- GET  /options  -> enumerations + property value bounds for selection controls
- POST /quote    -> annual / monthly cost, feature matrix, summary bullets
- POST /compare  -> feature grid and prices across coverage tiers

Runtime flow:
request JSON (range-checked here) -> RatingInput -> rating engine -> response
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from src.estimator.service import quote_from_input
from src.pricing.compare import price_comparison_frame, tier_comparison_frame
from src.pricing.config import (
    COVERAGE_LABELS,
    COVERAGE_TIERS,
    DEDUCTIBLES,
    DWELLING_LABELS,
    DWELLING_TYPES,
    LOCATIONS,
    PROPERTY_VALUE_MAX,
    PROPERTY_VALUE_MIN,
    PROPERTY_VALUE_STEP,
    get_rate_tables,
)
from src.pricing.exceptions import InvalidInputError
from src.pricing.quote import RatingInput
from src.utils.config import get_app_config
from src.utils.logging import setup_logging

CONFIG = get_app_config()

app = FastAPI(title="Renters Insurance Quote Engine", version="0.1.0")


# Configure logging and warm the tables at startup (not at import, so importers keep their logging)
@app.on_event("startup")
def _startup() -> None:
    setup_logging(CONFIG.log_level)
    get_rate_tables()


class RatingRequest(BaseModel):
    property_value: int = Field(
        25_000,
        ge=PROPERTY_VALUE_MIN,
        le=PROPERTY_VALUE_MAX,
        multiple_of=PROPERTY_VALUE_STEP,
    )
    location: str = "CA"
    dwelling_type: Literal["apartment", "condo", "house", "townhouse"] = "apartment"
    coverage_tier: Literal["basic", "standard", "premium"] = "standard"
    deductible: Literal[250, 500, 1000, 2500] = 500

    @field_validator("location")
    @classmethod
    def _known_location(cls, v: str) -> str:
        code = v.strip().upper()
        if code not in LOCATIONS:
            raise ValueError(f"location must be one of the {len(LOCATIONS)} supported codes")
        return code

    def to_rating_input(self) -> RatingInput:
        return RatingInput(**self.model_dump())


class QuoteRequest(RatingRequest):
    include_comparison: bool = False

    def to_rating_input(self) -> RatingInput:
        return RatingInput(**self.model_dump(exclude={"include_comparison"}))


class QuoteResponse(BaseModel):
    table_version: str
    currency: str
    input: Dict[str, Any]
    quote: Dict[str, Any]
    display: Dict[str, str]
    notes: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    comparison: Optional[Dict[str, Dict[str, int]]] = None


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok", "table_version": get_rate_tables().version}


@app.get("/options")
def options() -> Dict[str, Any]:
    return {
        "locations": list(LOCATIONS),
        "dwelling_types": [{"value": d, "label": DWELLING_LABELS[d]} for d in DWELLING_TYPES],
        "coverage_tiers": [{"value": t, "label": COVERAGE_LABELS[t]} for t in COVERAGE_TIERS],
        "deductibles": list(DEDUCTIBLES),
        "property_value": {
            "min": PROPERTY_VALUE_MIN,
            "max": PROPERTY_VALUE_MAX,
            "step": PROPERTY_VALUE_STEP,
        },
    }


@app.post("/quote", response_model=QuoteResponse)
def quote(req: QuoteRequest) -> QuoteResponse:
    resp, warnings = quote_from_input(
        req.to_rating_input(),
        currency=CONFIG.currency,
        include_comparison=req.include_comparison,
    )
    out = resp.to_dict()
    out["warnings"] = warnings
    return QuoteResponse(**out)


@app.post("/compare")
def compare(req: RatingRequest) -> Dict[str, Any]:
    rating_input = req.to_rating_input()
    prices = price_comparison_frame(rating_input)
    features = tier_comparison_frame()
    return {
        "input": rating_input.to_dict(),
        "tiers": list(COVERAGE_TIERS),
        "prices": {tier: {k: int(v) for k, v in row.items()} for tier, row in prices.to_dict(orient="index").items()},
        "features": [
            {"label": label, **{tier: bool(row[tier]) for tier in COVERAGE_TIERS}}
            for label, row in features.iterrows()
        ],
    }
