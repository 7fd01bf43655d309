# src/pricing/compare.py
"""
Coverage tier comparison.

Prices the same rating input at every coverage tier and lays out the
feature matrix side by side (rows = features, columns = tiers).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional

import pandas as pd

from src.pricing.config import COVERAGE_TIERS, RateTables, get_rate_tables
from src.pricing.quote import Quote, RatingInput, compute_quote


def quote_all_tiers(
    rating_input: RatingInput,
    tables: Optional[RateTables] = None,
) -> Dict[str, Quote]:
    tables = tables or get_rate_tables()
    return {tier: compute_quote(replace(rating_input, coverage_tier=tier), tables) for tier in COVERAGE_TIERS}


def price_comparison_frame(
    rating_input: RatingInput,
    tables: Optional[RateTables] = None,
) -> pd.DataFrame:
    """
    One row per tier (breadth order) with annual_cost and monthly_cost.
    """
    quotes = quote_all_tiers(rating_input, tables)
    df = pd.DataFrame(
        [{"tier": t, "annual_cost": q.annual_cost, "monthly_cost": q.monthly_cost} for t, q in quotes.items()]
    )
    return df.set_index("tier")


def tier_comparison_frame(tables: Optional[RateTables] = None) -> pd.DataFrame:
    """
    Boolean inclusion grid: index = feature labels (table order), columns = tiers.
    """
    tables = tables or get_rate_tables()
    columns = {tier: [f.included for f in tables.coverage_features[tier]] for tier in COVERAGE_TIERS}
    labels = [f.label for f in tables.coverage_features[COVERAGE_TIERS[0]]]
    df = pd.DataFrame(columns, index=pd.Index(labels, name="feature"))
    return df
