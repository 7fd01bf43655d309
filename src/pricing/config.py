# src/pricing/config.py
"""
Rate tables for the renters insurance estimator.

The tables are compiled into the process and built once:
- base_rate + value_rate_per_unit (per 10,000 of personal property value)
- location multipliers (partial; unknown codes fall back to DEFAULT)
- dwelling / coverage / deductible multipliers (total over their enumerations)
- per-tier coverage feature matrix and summary bullets

Multipliers are Decimals so the reference scenarios reproduce exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from src.pricing.exceptions import RateTableError

RATE_TABLE_VERSION = "2026.1"

DEFAULT_LOCATION = "DEFAULT"

# Jurisdiction catalogue (50 states + DC), in selection-control order
LOCATIONS: Tuple[str, ...] = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    "DC",
)

DWELLING_TYPES: Tuple[str, ...] = ("apartment", "condo", "house", "townhouse")

# Ordered by protection breadth
COVERAGE_TIERS: Tuple[str, ...] = ("basic", "standard", "premium")

DEDUCTIBLES: Tuple[int, ...] = (250, 500, 1000, 2500)

# Recommended bounds for the property value control (not enforced by the engine)
PROPERTY_VALUE_MIN = 5_000
PROPERTY_VALUE_MAX = 200_000
PROPERTY_VALUE_STEP = 1_000

DWELLING_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "apartment": "Apartment",
        "condo": "Condo",
        "house": "Rented House",
        "townhouse": "Townhouse",
    }
)

COVERAGE_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "basic": "Basic (Essential Coverage)",
        "standard": "Standard (Recommended)",
        "premium": "Premium (Maximum Protection)",
    }
)


@dataclass(frozen=True)
class CoverageFeature:
    label: str
    included: bool


@dataclass(frozen=True)
class RateTables:
    version: str
    base_rate: Decimal
    value_rate_per_unit: Decimal
    location_multiplier: Mapping[str, Decimal]
    dwelling_multiplier: Mapping[str, Decimal]
    coverage_multiplier: Mapping[str, Decimal]
    deductible_multiplier: Mapping[int, Decimal]
    coverage_features: Mapping[str, Tuple[CoverageFeature, ...]]
    coverage_summary: Mapping[str, Tuple[str, ...]]


def _decimals(mapping: Dict) -> Mapping:
    return MappingProxyType({k: Decimal(str(v)) for k, v in mapping.items()})


def _features(included_count: int, labels: Iterable[str]) -> Tuple[CoverageFeature, ...]:
    return tuple(CoverageFeature(label=lbl, included=i < included_count) for i, lbl in enumerate(labels))


_FEATURE_LABELS = (
    "Personal Property",
    "Liability Protection",
    "Additional Living Expenses",
    "Medical Payments",
    "Valuable Items Coverage",
    "Identity Theft Protection",
)


def build_reference_tables() -> RateTables:
    """
    Build the reference rate table set and check its invariants.
    """
    tables = RateTables(
        version=RATE_TABLE_VERSION,
        base_rate=Decimal("180"),
        value_rate_per_unit=Decimal("12"),
        location_multiplier=_decimals(
            {
                "LA": "1.45",
                "FL": "1.40",
                "TX": "1.35",
                "OK": "1.30",
                "MS": "1.25",
                "AL": "1.20",
                "CA": "1.15",
                "NY": "1.15",
                DEFAULT_LOCATION: "1.00",
            }
        ),
        dwelling_multiplier=_decimals({"apartment": "1.00", "condo": "0.95", "house": "1.15", "townhouse": "1.05"}),
        coverage_multiplier=_decimals({"basic": "0.70", "standard": "1.00", "premium": "1.40"}),
        deductible_multiplier=_decimals({250: "1.15", 500: "1.00", 1000: "0.90", 2500: "0.75"}),
        coverage_features=MappingProxyType(
            {
                "basic": _features(2, _FEATURE_LABELS),
                "standard": _features(4, _FEATURE_LABELS),
                "premium": _features(6, _FEATURE_LABELS),
            }
        ),
        coverage_summary=MappingProxyType(
            {
                "basic": (
                    "Personal property coverage",
                    "Basic liability protection",
                    "Fire and theft coverage",
                    "Lowest premium",
                ),
                "standard": (
                    "Enhanced property limits",
                    "Full liability coverage",
                    "Additional living expenses",
                    "Water damage protection",
                ),
                "premium": (
                    "Replacement cost coverage",
                    "Extended liability limits",
                    "Valuable items coverage",
                    "Identity theft protection",
                ),
            }
        ),
    )
    validate_rate_tables(tables)
    return tables


def _require_total(name: str, table: Mapping, keys: Iterable) -> None:
    missing = [k for k in keys if k not in table]
    if missing:
        raise RateTableError(f"{name} missing entries: {missing}")


def _require_strict(name: str, values: list[Decimal], increasing: bool) -> None:
    pairs = zip(values, values[1:])
    ok = all(a < b for a, b in pairs) if increasing else all(a > b for a, b in pairs)
    if not ok:
        direction = "increasing" if increasing else "decreasing"
        raise RateTableError(f"{name} must be strictly {direction}: {values}")


def validate_rate_tables(tables: RateTables) -> None:
    """
    Check structural invariants:
    - dwelling / coverage / deductible tables are total; location has DEFAULT
    - all multipliers positive
    - coverage multipliers increase with breadth, deductible multipliers decrease
    - feature labels identical (and identically ordered) across tiers
    - included features nest: basic <= standard <= premium
    """
    _require_total("dwelling_multiplier", tables.dwelling_multiplier, DWELLING_TYPES)
    _require_total("coverage_multiplier", tables.coverage_multiplier, COVERAGE_TIERS)
    _require_total("deductible_multiplier", tables.deductible_multiplier, DEDUCTIBLES)
    _require_total("location_multiplier", tables.location_multiplier, [DEFAULT_LOCATION])
    _require_total("coverage_features", tables.coverage_features, COVERAGE_TIERS)
    _require_total("coverage_summary", tables.coverage_summary, COVERAGE_TIERS)

    for name in ("location_multiplier", "dwelling_multiplier", "coverage_multiplier", "deductible_multiplier"):
        table: Mapping = getattr(tables, name)
        bad = {k: v for k, v in table.items() if v <= 0}
        if bad:
            raise RateTableError(f"{name} has non-positive multipliers: {bad}")

    _require_strict("coverage_multiplier", [tables.coverage_multiplier[t] for t in COVERAGE_TIERS], increasing=True)
    _require_strict("deductible_multiplier", [tables.deductible_multiplier[d] for d in DEDUCTIBLES], increasing=False)

    reference_labels: Optional[list[str]] = None
    previous: set[str] = set()
    for tier in COVERAGE_TIERS:
        rows = tables.coverage_features[tier]
        labels = [f.label for f in rows]
        if reference_labels is None:
            reference_labels = labels
        elif labels != reference_labels:
            raise RateTableError(f"coverage_features[{tier}] labels differ from {COVERAGE_TIERS[0]}: {labels}")

        included = {f.label for f in rows if f.included}
        if not previous <= included:
            raise RateTableError(f"coverage_features[{tier}] drops features: {sorted(previous - included)}")
        previous = included

        if not tables.coverage_summary[tier]:
            raise RateTableError(f"coverage_summary[{tier}] is empty")


# Process-wide snapshot (read-only; shared freely across threads / requests)
_CACHED_TABLES: Optional[RateTables] = None


def get_rate_tables() -> RateTables:
    """
    Return the process-wide rate table snapshot, building it on first use.
    """
    global _CACHED_TABLES
    if _CACHED_TABLES is None:
        _CACHED_TABLES = build_reference_tables()
    return _CACHED_TABLES
