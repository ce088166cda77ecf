"""Compensation decomposition engine - main solver."""

from __future__ import annotations

import logging
from decimal import Decimal
from functools import lru_cache

from compensation_engine.calculators import statutory
from compensation_engine.calculators.constants import (
    BASIC_PCT_OF_CTC,
    CTC_TOLERANCE,
    HUNDRED,
    MAX_ITERATIONS,
    MONTHS_PER_YEAR,
    ZERO,
)
from compensation_engine.calculators.types import (
    AnnualBreakdown,
    CompensationPolicy,
    CompensationView,
    DecompositionReport,
    MonthlyBreakdown,
    round_to_cents,
)

logger = logging.getLogger(__name__)


class CompensationEngine:
    """Derives a monthly pay structure whose employer outlay matches annual CTC.

    Calculation pipeline:
    1) Basic is a fixed share of monthly CTC, HRA a percentage of basic
    2) Fixed allowances pass through
    3) Special allowance is seeded with whatever monthly CTC is left
    4) Fixed-point loop: employer PF, employer ESI and gratuity are recomputed
       from the current gross and the shortfall is pushed into special allowance
    5) Special allowance is rounded to cents and contributions recomputed once
    6) Professional tax, TDS and net pay are derived from the final gross

    The engine is stateless and never raises for numeric input. A negative
    special allowance is clamped to zero and reported on the result.
    """

    def __init__(
        self,
        max_iterations: int = MAX_ITERATIONS,
        tolerance: Decimal = CTC_TOLERANCE,
    ):
        self.max_iterations = max_iterations
        self.tolerance = tolerance

    def solve(self, policy: CompensationPolicy) -> DecompositionReport:
        """Run the decomposition and return the breakdown with loop diagnostics."""
        annual_ctc = policy.annual_ctc
        include_pf = policy.include_provident_fund
        include_esi = policy.include_state_insurance
        allowances = policy.allowances

        monthly_ctc = annual_ctc / MONTHS_PER_YEAR
        basic = monthly_ctc * BASIC_PCT_OF_CTC
        hra = basic * policy.hra_percentage / HUNDRED
        fixed = basic + hra + allowances.total

        special = max(ZERO, monthly_ctc - fixed)

        iterations = 0
        diff = ZERO
        converged = False
        clamped = False
        for iterations in range(1, self.max_iterations + 1):
            contributions = statutory.compute_contributions(
                basic, fixed + special, include_pf, include_esi
            )
            diff = annual_ctc - contributions.implied_annual_ctc
            logger.debug(
                "iteration %d: special=%s diff=%s", iterations, special, diff
            )
            if abs(diff) < self.tolerance:
                converged = True
                break

            special += diff / MONTHS_PER_YEAR
            if special < 0:
                special = ZERO
                clamped = True
                logger.debug(
                    "special allowance clamped to zero; fixed components exceed CTC %s",
                    annual_ctc,
                )
                break

        if not converged and not clamped:
            logger.warning(
                "CTC decomposition did not converge in %d iterations (ctc=%s, residual=%s)",
                self.max_iterations,
                annual_ctc,
                diff,
            )

        # Final pass on the rounded special allowance
        special = round_to_cents(special)
        final = statutory.compute_contributions(
            basic, fixed + special, include_pf, include_esi
        )
        gross = final.gross

        professional_tax = statutory.professional_tax(
            gross, policy.professional_tax_override
        )
        tds_monthly = statutory.tds(gross, policy.tds_percent)
        net_pay = (
            gross
            - final.employee_provident_fund
            - final.employee_state_insurance
            - professional_tax
            - tds_monthly
        )

        breakdown = MonthlyBreakdown(
            basic=basic,
            hra=hra,
            conveyance=allowances.conveyance,
            telephone=allowances.telephone,
            medical=allowances.medical,
            special_allowance=special,
            gross=gross,
            employee_provident_fund=final.employee_provident_fund,
            employer_provident_fund=final.employer_provident_fund,
            employee_state_insurance=final.employee_state_insurance,
            employer_state_insurance=final.employer_state_insurance,
            gratuity_annual_provision=final.gratuity_annual_provision,
            tds_monthly=tds_monthly,
            professional_tax=professional_tax,
            net_pay=net_pay,
        )

        return DecompositionReport(
            annual_ctc=annual_ctc,
            breakdown=breakdown,
            iterations=iterations,
            converged=converged,
            clamped=clamped,
            fingerprint=policy.fingerprint(),
        )

    def decompose(self, policy: CompensationPolicy) -> MonthlyBreakdown:
        """Return the monthly breakdown for a policy."""
        return self.solve(policy).breakdown

    def to_annual_view(self, policy: CompensationPolicy) -> CompensationView:
        """Return monthly and annual views of the same breakdown."""
        return _build_view(policy, self.decompose(policy))


def _build_view(policy: CompensationPolicy, monthly: MonthlyBreakdown) -> CompensationView:
    return CompensationView(
        annual_ctc=policy.annual_ctc,
        monthly_ctc=policy.annual_ctc / MONTHS_PER_YEAR,
        monthly=monthly,
        annual=AnnualBreakdown.from_monthly(monthly),
    )


_default_engine = CompensationEngine()


@lru_cache(maxsize=1024)
def decompose(policy: CompensationPolicy) -> MonthlyBreakdown:
    """Decompose a policy with the default engine.

    Results are immutable, so cached instances are shared between callers.
    """
    return _default_engine.decompose(policy)


def to_annual_view(policy: CompensationPolicy) -> CompensationView:
    """Monthly and annual views from the cached default decomposition."""
    return _build_view(policy, decompose(policy))
