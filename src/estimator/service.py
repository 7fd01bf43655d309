"""
End-to-end quote service for the renters insurance estimator.

Single source of truth for collaborators (API, Lambda, CLI):
- raw dict -> RatingInput (+ recommended-range warnings)
- RatingInput -> rating engine -> QuoteResponse
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from src.estimator.schemas import QuoteResponse
from src.pricing.compare import quote_all_tiers
from src.pricing.config import (
    LOCATIONS,
    PROPERTY_VALUE_MAX,
    PROPERTY_VALUE_MIN,
    PROPERTY_VALUE_STEP,
    RateTables,
    get_rate_tables,
)
from src.pricing.exceptions import InvalidInputError
from src.pricing.quote import RatingInput, compute_quote
from src.utils.formatting import format_currency, format_number

logger = logging.getLogger(__name__)

NOTES = [
    "Estimates only. Actual premiums vary.",
    "Actual insurance premiums vary based on building age, claims history, credit score, and insurer criteria.",
]

# field -> accepted keys (snake_case first, then the form's camelCase names)
_KEY_ALIASES = {
    "property_value": ("property_value", "propertyValue"),
    "location": ("location", "state"),
    "dwelling_type": ("dwelling_type", "dwellingType", "unitType"),
    "coverage_tier": ("coverage_tier", "coverageTier", "coverageLevel"),
    "deductible": ("deductible",),
}


def _pick(payload: Dict[str, Any], field: str) -> Any:
    for key in _KEY_ALIASES[field]:
        v = payload.get(key)
        if v is not None:
            return v
    raise InvalidInputError(f"Missing field: {field}")


def _to_int(val: Any, field: str) -> int:
    if isinstance(val, bool):
        raise InvalidInputError(f"{field} must be an integer; got {val!r}")
    if isinstance(val, int):
        return val
    if isinstance(val, float) and val.is_integer():
        return int(val)
    if isinstance(val, str):
        s = val.strip().replace(",", "")
        try:
            return int(s)
        except ValueError:
            pass
    raise InvalidInputError(f"{field} must be an integer; got {val!r}")


def rating_input_from_dict(payload: Dict[str, Any]) -> RatingInput:
    """
    Build a RatingInput from a raw dict (snake_case or camelCase keys).
    Enumerated fields are normalised (trimmed; location upper-cased, others lower-cased).
    """
    if not isinstance(payload, dict):
        raise InvalidInputError(f"Payload must be an object; got {type(payload).__name__}")
    return RatingInput(
        property_value=_to_int(_pick(payload, "property_value"), "property_value"),
        location=str(_pick(payload, "location")).strip().upper(),
        dwelling_type=str(_pick(payload, "dwelling_type")).strip().lower(),
        coverage_tier=str(_pick(payload, "coverage_tier")).strip().lower(),
        deductible=_to_int(_pick(payload, "deductible"), "deductible"),
    )


def range_warnings(rating_input: RatingInput) -> list[str]:
    """
    Soft checks the engine does not enforce.
    """
    warnings: list[str] = []
    value = rating_input.property_value
    if not PROPERTY_VALUE_MIN <= value <= PROPERTY_VALUE_MAX:
        warnings.append(
            f"property_value {format_number(value)} outside recommended range "
            f"{format_number(PROPERTY_VALUE_MIN)}-{format_number(PROPERTY_VALUE_MAX)}"
        )
    elif value % PROPERTY_VALUE_STEP:
        warnings.append(f"property_value {format_number(value)} is not a multiple of {format_number(PROPERTY_VALUE_STEP)}")

    if rating_input.location not in LOCATIONS:
        warnings.append(f"Unknown location '{rating_input.location}'; DEFAULT multiplier applied")
    return warnings


def quote_from_input(
    rating_input: RatingInput,
    *,
    tables: Optional[RateTables] = None,
    currency: str = "USD",
    include_comparison: bool = False,
) -> Tuple[QuoteResponse, list[str]]:
    """
    Price a validated input. Returns (QuoteResponse, warnings).
    """
    tables = tables or get_rate_tables()
    warnings = range_warnings(rating_input)

    q = compute_quote(rating_input, tables)

    comparison = None
    if include_comparison:
        comparison = {
            tier: {"annual_cost": tq.annual_cost, "monthly_cost": tq.monthly_cost}
            for tier, tq in quote_all_tiers(rating_input, tables).items()
        }

    logger.debug(
        "Quote computed",
        extra={
            "table_version": tables.version,
            "location": rating_input.location,
            "coverage_tier": rating_input.coverage_tier,
            "annual_cost": q.annual_cost,
            "monthly_cost": q.monthly_cost,
            "warnings": len(warnings),
        },
    )

    resp = QuoteResponse(
        table_version=tables.version,
        currency=currency,
        rating_input=rating_input.to_dict(),
        quote=q.to_dict(),
        display={
            "monthly_cost": format_currency(q.monthly_cost, currency),
            "annual_cost": format_currency(q.annual_cost, currency),
            "property_value": format_currency(rating_input.property_value, currency),
        },
        notes=list(NOTES),
        comparison=comparison,
    )
    return resp, warnings


def quote_from_dict(
    payload: Dict[str, Any],
    *,
    currency: str = "USD",
    include_comparison: bool = False,
) -> Dict[str, Any]:
    """
    Convenience: returns a JSON-ready dict and includes warnings.
    """
    rating_input = rating_input_from_dict(payload)
    resp, warnings = quote_from_input(rating_input, currency=currency, include_comparison=include_comparison)
    out = resp.to_dict()
    out["warnings"] = warnings
    return out
