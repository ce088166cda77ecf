"""Unit tests for policy coercion and record mapping."""

from decimal import Decimal

import pytest

from compensation_engine.calculators.types import (
    AnnualBreakdown,
    CompensationPolicy,
    FixedAllowances,
    MonthlyBreakdown,
    to_bool,
    to_decimal,
)


class TestToDecimal:
    """Loose numeric input handling."""

    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", "abc", float("nan"), float("inf"), Decimal("NaN")],
    )
    def test_unusable_values_become_zero(self, value):
        assert to_decimal(value) == 0

    def test_float_goes_through_string(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_numeric_strings(self):
        assert to_decimal(" 1250.50 ") == Decimal("1250.50")

    def test_bool(self):
        assert to_decimal(True) == 1


class TestToBool:
    """Loose flag input handling."""

    @pytest.mark.parametrize(
        "value", [None, False, 0, "", "0", "false", "False", " no ", "off"]
    )
    def test_false_values(self, value):
        assert to_bool(value) is False

    @pytest.mark.parametrize("value", [True, 1, "1", "true", "TRUE", "yes", "on"])
    def test_true_values(self, value):
        assert to_bool(value) is True


class TestCompensationPolicy:
    """Construction and mapping."""

    def test_fields_are_coerced(self):
        policy = CompensationPolicy(
            annual_ctc=600000,
            hra_percentage="40",
            allowances={"conveyance": 1600, "medicalAllowance": "1250"},
            include_provident_fund=1,
        )

        assert policy.annual_ctc == Decimal("600000")
        assert policy.hra_percentage == Decimal("40")
        assert policy.allowances == FixedAllowances(
            conveyance=Decimal("1600"), medical=Decimal("1250")
        )
        assert policy.include_provident_fund is True
        assert policy.include_state_insurance is False

    def test_from_employee_record(self):
        record = {
            "ctc": "1200000",
            "hraPercentage": 10,
            "conveyance": 1000,
            "telephone": 500,
            "medicalAllowance": 1250,
            "includePF": True,
            "includeESI": False,
            "pt": 0,
            "tds": None,
            "firstName": "ignored",
        }

        policy = CompensationPolicy.from_mapping(record)

        assert policy.annual_ctc == Decimal("1200000")
        assert policy.allowances.total == Decimal("2750")
        assert policy.include_provident_fund is True
        assert policy.tds_percent == 0

    def test_from_snake_case_mapping(self):
        policy = CompensationPolicy.from_mapping(
            {"annual_ctc": 240000, "include_state_insurance": True, "medical": 100}
        )

        assert policy.annual_ctc == Decimal("240000")
        assert policy.include_state_insurance is True
        assert policy.allowances.medical == Decimal("100")

    def test_string_flags_from_record(self):
        """Records that store flags as text keep "false" switched off."""
        policy = CompensationPolicy.from_mapping(
            {"ctc": "1200000", "includePF": "false", "includeESI": "true"}
        )

        assert policy.include_provident_fund is False
        assert policy.include_state_insurance is True

    def test_policies_are_hashable(self):
        a = CompensationPolicy(annual_ctc=100)
        b = CompensationPolicy(annual_ctc="100")
        assert {a: 1}[b] == 1

    def test_fingerprint_is_stable(self):
        a = CompensationPolicy(annual_ctc=100, include_provident_fund=True)
        b = CompensationPolicy(annual_ctc=100, include_provident_fund=True)
        c = CompensationPolicy(annual_ctc=100)

        assert a.fingerprint() == b.fingerprint()
        assert a.fingerprint() != c.fingerprint()
        assert len(a.fingerprint()) == 32


def test_annual_breakdown_keeps_gratuity():
    monthly = MonthlyBreakdown(gross=Decimal("100"), gratuity_annual_provision=Decimal("50"))
    annual = AnnualBreakdown.from_monthly(monthly)

    assert annual.gross == Decimal("1200")
    assert annual.gratuity_annual_provision == Decimal("50")


def test_implied_annual_ctc():
    breakdown = MonthlyBreakdown(
        gross=Decimal("98200"),
        employer_provident_fund=Decimal("1800"),
        gratuity_annual_provision=Decimal("0"),
    )
    assert breakdown.implied_annual_ctc == Decimal("1200000")
