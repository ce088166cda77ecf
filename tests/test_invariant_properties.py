"""Property-based tests for decomposition invariants.

These use hypothesis to generate policies across the realistic input range
and check that the engine's guarantees hold for every one of them.
"""

from __future__ import annotations

from decimal import Decimal

from hypothesis import given, settings, strategies as st

from compensation_engine.calculators.constants import CTC_TOLERANCE, ESI_EMPLOYER_RATE
from compensation_engine.calculators.engine import CompensationEngine
from compensation_engine.calculators.types import CompensationPolicy, FixedAllowances

# Final cents rounding of special allowance can move annual outlay by this much.
ROUNDING_SLACK = Decimal("12") * Decimal("0.005") * (1 + ESI_EMPLOYER_RATE)

engine = CompensationEngine()

money = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("10000000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)
allowance = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("5000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)
percent = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("100"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)


@st.composite
def policies(draw, annual_ctc=money):
    return CompensationPolicy(
        annual_ctc=draw(annual_ctc),
        hra_percentage=draw(percent),
        allowances=FixedAllowances(
            conveyance=draw(allowance),
            telephone=draw(allowance),
            medical=draw(allowance),
        ),
        include_provident_fund=draw(st.booleans()),
        include_state_insurance=draw(st.booleans()),
        professional_tax_override=draw(st.sampled_from([Decimal("0"), Decimal("200")])),
        tds_percent=draw(
            st.decimals(min_value=Decimal("0"), max_value=Decimal("30"), places=2)
        ),
    )


class TestOutlayInvariant:
    """Employer outlay reproduces CTC unless the clamp path was taken."""

    @given(policy=policies())
    @settings(max_examples=300, deadline=None)
    def test_outlay_matches_ctc(self, policy: CompensationPolicy):
        report = engine.solve(policy)

        if not report.clamped:
            assert report.converged
            assert abs(report.residual) < CTC_TOLERANCE + ROUNDING_SLACK

    @given(policy=policies())
    @settings(max_examples=200, deadline=None)
    def test_amounts_non_negative(self, policy: CompensationPolicy):
        breakdown = engine.decompose(policy)

        for name, value in breakdown.to_dict().items():
            if name != "net_pay":
                assert value >= 0, name

    @given(policy=policies())
    @settings(max_examples=100, deadline=None)
    def test_deterministic(self, policy: CompensationPolicy):
        assert engine.solve(policy) == engine.solve(policy)


class TestMonotonicity:
    """More CTC never means less take-home pay."""

    @given(
        policy=policies(
            annual_ctc=st.decimals(
                min_value=Decimal("0"), max_value=Decimal("5000000"), places=2
            )
        ),
        raise_by=st.decimals(min_value=Decimal("1000"), max_value=Decimal("500000"), places=2),
    )
    @settings(max_examples=300, deadline=None)
    def test_net_pay_non_decreasing(self, policy: CompensationPolicy, raise_by: Decimal):
        # Hold professional tax fixed; the default rule steps by 200 at its threshold.
        fixed_pt = CompensationPolicy(
            annual_ctc=policy.annual_ctc,
            hra_percentage=policy.hra_percentage,
            allowances=policy.allowances,
            include_provident_fund=policy.include_provident_fund,
            include_state_insurance=policy.include_state_insurance,
            professional_tax_override=Decimal("200"),
            tds_percent=policy.tds_percent,
        )
        raised = CompensationPolicy(
            annual_ctc=policy.annual_ctc + raise_by,
            hra_percentage=policy.hra_percentage,
            allowances=policy.allowances,
            include_provident_fund=policy.include_provident_fund,
            include_state_insurance=policy.include_state_insurance,
            professional_tax_override=Decimal("200"),
            tds_percent=policy.tds_percent,
        )

        assert engine.decompose(raised).net_pay >= engine.decompose(fixed_pt).net_pay
