"""Pytest fixtures for compensation engine tests."""

from __future__ import annotations

from decimal import Decimal

import pytest

from compensation_engine.calculators.engine import CompensationEngine
from compensation_engine.calculators.types import CompensationPolicy, FixedAllowances


def make_policy(**overrides) -> CompensationPolicy:
    """Reference policy: 12 lakh CTC, 10% HRA, PF only."""
    values = {
        "annual_ctc": Decimal("1200000"),
        "hra_percentage": Decimal("10"),
        "allowances": FixedAllowances(
            conveyance=Decimal("1000"),
            telephone=Decimal("500"),
            medical=Decimal("1250"),
        ),
        "include_provident_fund": True,
        "include_state_insurance": False,
        "professional_tax_override": Decimal("0"),
        "tds_percent": Decimal("0"),
    }
    values.update(overrides)
    return CompensationPolicy(**values)


@pytest.fixture
def engine() -> CompensationEngine:
    return CompensationEngine()


@pytest.fixture
def pf_only_policy() -> CompensationPolicy:
    return make_policy()


@pytest.fixture
def pf_and_esi_policy() -> CompensationPolicy:
    """Low CTC with both statutory schemes, so gratuity applies."""
    return CompensationPolicy(
        annual_ctc=Decimal("240000"),
        hra_percentage=Decimal("40"),
        include_provident_fund=True,
        include_state_insurance=True,
    )
