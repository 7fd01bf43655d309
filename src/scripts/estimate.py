"""
Command-line estimate.

Example:
  python -m src.scripts.estimate --property_value 40000 --location TX --compare
"""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

import pandas as pd

from src.estimator.service import quote_from_input
from src.pricing.compare import price_comparison_frame, tier_comparison_frame
from src.pricing.config import COVERAGE_TIERS, DEDUCTIBLES, DWELLING_TYPES
from src.pricing.exceptions import InvalidInputError
from src.pricing.quote import RatingInput
from src.utils.config import get_app_config


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Estimate a renters insurance premium from common rating factors.")
    p.add_argument("--property_value", type=int, default=25000, help="Personal property value (recommended 5,000-200,000)")
    p.add_argument("--location", type=str, default="CA", help="Two-letter state code (DC included); unknown codes use the default rate")
    p.add_argument("--dwelling_type", type=str, default="apartment", choices=DWELLING_TYPES)
    p.add_argument("--coverage_tier", type=str, default="standard", choices=COVERAGE_TIERS)
    p.add_argument("--deductible", type=int, default=500, choices=DEDUCTIBLES)
    p.add_argument("--compare", action="store_true", help="Also print prices and features for every coverage tier")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    cfg = get_app_config()

    rating_input = RatingInput(
        property_value=args.property_value,
        location=args.location.strip().upper(),
        dwelling_type=args.dwelling_type,
        coverage_tier=args.coverage_tier,
        deductible=args.deductible,
    )

    try:
        resp, warnings = quote_from_input(rating_input, currency=cfg.currency)
    except InvalidInputError as e:
        print(f"[ERROR] {e}")
        return 2

    print(f"Monthly cost : {resp.display['monthly_cost']}")
    print(f"Annual cost  : {resp.display['annual_cost']}")
    print(f"Property     : {resp.display['property_value']}")
    print(f"Rate tables  : {resp.table_version}")

    print("\nCoverage summary:")
    for bullet in resp.quote["summary_bullets"]:
        print(f"  - {bullet}")

    print("\nCoverage details:")
    for row in resp.quote["feature_matrix"]:
        status = "Included" if row["included"] else "Not Included"
        print(f"  {row['label']:<28} {status}")

    if args.compare:
        with pd.option_context("display.width", 120):
            print("\nPrice by coverage tier:")
            print(price_comparison_frame(rating_input).to_string())
            print("\nFeatures by coverage tier:")
            grid = tier_comparison_frame().apply(lambda col: col.map({True: "yes", False: "-"}))
            print(grid.to_string())

    for w in warnings:
        print(f"[WARN] {w}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
