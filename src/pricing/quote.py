# src/pricing/quote.py
"""
Rating engine.

Provides:
- rating input / quote value objects
- location multiplier lookup with DEFAULT fallback
- premium calculation (annual + monthly)

Notes:
- Pure and deterministic: arithmetic and table lookups only, no I/O.
- Both rounding points use round-half-up on exact Decimal values
  (CA reference input -> 241.5 -> 242; 242 / 12 = 20.17 -> 20).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from src.pricing.config import (
    DEFAULT_LOCATION,
    CoverageFeature,
    RateTables,
    get_rate_tables,
)
from src.pricing.exceptions import InvalidInputError

VALUE_UNIT = Decimal("10000")
MONTHS_PER_YEAR = 12
PRECISION_HEADROOM = 40


@dataclass(frozen=True)
class RatingInput:
    property_value: int
    location: str
    dwelling_type: str
    coverage_tier: str
    deductible: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Quote:
    annual_cost: int
    monthly_cost: int
    feature_matrix: Tuple[CoverageFeature, ...]
    summary_bullets: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "annual_cost": self.annual_cost,
            "monthly_cost": self.monthly_cost,
            "feature_matrix": [asdict(f) for f in self.feature_matrix],
            "summary_bullets": list(self.summary_bullets),
        }


def round_half_up(value: Union[Decimal, int]) -> int:
    d = Decimal(value)
    with localcontext() as ctx:
        # quantize needs room for every integer digit
        ctx.prec = max(ctx.prec, d.adjusted() + 2)
        return int(d.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def location_multiplier(location: str, tables: RateTables) -> Decimal:
    """
    Location table is partial: codes without an entry use the DEFAULT multiplier.
    """
    table = tables.location_multiplier
    if isinstance(location, str) and location in table:
        return table[location]
    return table[DEFAULT_LOCATION]


def _closed_lookup(table: Mapping, key: Any, field: str, kind: type) -> Decimal:
    # bool is an int subclass; True would otherwise reach the deductible table
    if isinstance(key, bool) or not isinstance(key, kind) or key not in table:
        raise InvalidInputError(f"{field} must be one of {list(table)}; got {key!r}")
    return table[key]


def validate_rating_input(rating_input: RatingInput, tables: RateTables) -> None:
    """
    Reject contract violations:
    - property_value must be a positive int
    - dwelling_type / coverage_tier / deductible must be in their closed tables
    Unknown locations are not an error (DEFAULT fallback).
    """
    value = rating_input.property_value
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"property_value must be an integer; got {value!r}")
    if value <= 0:
        raise InvalidInputError(f"property_value must be positive; got {value}")

    _closed_lookup(tables.dwelling_multiplier, rating_input.dwelling_type, "dwelling_type", str)
    _closed_lookup(tables.coverage_multiplier, rating_input.coverage_tier, "coverage_tier", str)
    _closed_lookup(tables.deductible_multiplier, rating_input.deductible, "deductible", int)


def compute_quote(
    rating_input: RatingInput,
    tables: Optional[RateTables] = None,
) -> Quote:
    """
    Price one rating input.

    annual = round((base_rate + value / 10000 * value_rate)
                   * location * dwelling * coverage * deductible)
    monthly = round(annual / 12)
    """
    tables = tables or get_rate_tables()
    validate_rating_input(rating_input, tables)

    with localcontext() as ctx:
        # exact for any property value: its decimal digits (<= bits / 3 + 1) plus the multipliers' decimal places
        ctx.prec = rating_input.property_value.bit_length() // 3 + 1 + PRECISION_HEADROOM

        value_component = Decimal(rating_input.property_value) / VALUE_UNIT * tables.value_rate_per_unit
        subtotal = tables.base_rate + value_component

        annual_raw = (
            subtotal
            * location_multiplier(rating_input.location, tables)
            * tables.dwelling_multiplier[rating_input.dwelling_type]
            * tables.coverage_multiplier[rating_input.coverage_tier]
            * tables.deductible_multiplier[rating_input.deductible]
        )

        annual_cost = round_half_up(annual_raw)
        monthly_cost = round_half_up(Decimal(annual_cost) / MONTHS_PER_YEAR)

    tier = rating_input.coverage_tier
    return Quote(
        annual_cost=annual_cost,
        monthly_cost=monthly_cost,
        feature_matrix=tables.coverage_features[tier],
        summary_bullets=tables.coverage_summary[tier],
    )
