"""Unit tests for statutory contribution rules."""

from decimal import Decimal

from compensation_engine.calculators import statutory


class TestProvidentFund:
    """PF on basic, capped at the wage ceiling."""

    def test_below_ceiling(self):
        employee, employer = statutory.provident_fund(Decimal("10000"), True)
        assert employee == Decimal("1200")
        assert employer == Decimal("1200")

    def test_above_ceiling_is_capped(self):
        employee, employer = statutory.provident_fund(Decimal("50000"), True)
        assert employee == Decimal("1800")
        assert employer == Decimal("1800")

    def test_disabled(self):
        assert statutory.provident_fund(Decimal("50000"), False) == (0, 0)


class TestStateInsurance:
    """ESI on gross, no ceiling."""

    def test_rates(self):
        employee, employer = statutory.state_insurance(Decimal("20000"), True)
        assert employee == Decimal("150")
        assert employer == Decimal("650")

    def test_disabled(self):
        assert statutory.state_insurance(Decimal("20000"), False) == (0, 0)


class TestGratuity:
    def test_both_schemes(self):
        assert statutory.gratuity_provision(Decimal("10000"), True, True) == Decimal("5772")

    def test_pf_alone_is_not_enough(self):
        assert statutory.gratuity_provision(Decimal("10000"), True, False) == 0


class TestProfessionalTax:
    """Two-tier default with an override."""

    def test_at_threshold_is_exempt(self):
        assert statutory.professional_tax(Decimal("25000")) == 0

    def test_above_threshold(self):
        assert statutory.professional_tax(Decimal("25000.01")) == Decimal("200")

    def test_override_wins(self):
        assert statutory.professional_tax(Decimal("1000"), Decimal("300")) == Decimal("300")

    def test_zero_override_uses_default(self):
        assert statutory.professional_tax(Decimal("98200"), Decimal("0")) == Decimal("200")


class TestTds:
    def test_percentage_of_gross(self):
        assert statutory.tds(Decimal("98200"), Decimal("5")) == Decimal("4910")

    def test_zero_percent(self):
        assert statutory.tds(Decimal("98200"), Decimal("0")) == 0


def test_contributions_feed_implied_ctc():
    """Implied CTC counts gross, employer shares and gratuity, not employee shares."""
    contributions = statutory.compute_contributions(
        Decimal("10000"), Decimal("20000"), True, True
    )

    expected = (
        Decimal("20000") * 12
        + Decimal("1200") * 12
        + Decimal("650") * 12
        + Decimal("5772")
    )
    assert contributions.implied_annual_ctc == expected
