"""Pytest fixtures for the quote engine"""

import pytest

from src.pricing.config import RateTables, build_reference_tables
from src.pricing.quote import RatingInput


@pytest.fixture
def tables() -> RateTables:
    """Fresh reference table set"""
    return build_reference_tables()


@pytest.fixture
def ca_input() -> RatingInput:
    """Default form values: $25,000 apartment in CA, standard tier, $500 deductible"""
    return RatingInput(
        property_value=25000,
        location="CA",
        dwelling_type="apartment",
        coverage_tier="standard",
        deductible=500,
    )
