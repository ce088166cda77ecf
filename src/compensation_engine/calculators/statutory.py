"""Statutory contribution and withholding rules.

Each function is a flat-rate rule on a monthly wage figure. The convergence
loop in `engine.py` calls `compute_contributions` once per iteration.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from compensation_engine.calculators.constants import (
    ESI_EMPLOYEE_RATE,
    ESI_EMPLOYER_RATE,
    GRATUITY_RATE_ANNUAL,
    HUNDRED,
    MONTHS_PER_YEAR,
    PF_EMPLOYEE_RATE,
    PF_EMPLOYER_RATE,
    PF_WAGE_CEILING_MONTHLY,
    PROFESSIONAL_TAX_DEFAULT,
    PROFESSIONAL_TAX_THRESHOLD,
    ZERO,
)


@dataclass(frozen=True)
class StatutoryContributions:
    """Gross pay and the contributions that depend on it."""

    gross: Decimal
    employee_provident_fund: Decimal
    employer_provident_fund: Decimal
    employee_state_insurance: Decimal
    employer_state_insurance: Decimal
    gratuity_annual_provision: Decimal

    @property
    def implied_annual_ctc(self) -> Decimal:
        return implied_annual_ctc(
            self.gross,
            self.employer_provident_fund,
            self.employer_state_insurance,
            self.gratuity_annual_provision,
        )


def provident_fund_wage(basic: Decimal) -> Decimal:
    """PF is charged on basic up to the statutory ceiling."""
    return min(basic, PF_WAGE_CEILING_MONTHLY)


def provident_fund(basic: Decimal, enabled: bool) -> tuple[Decimal, Decimal]:
    """Return (employee, employer) monthly PF contributions."""
    if not enabled:
        return ZERO, ZERO
    wage = provident_fund_wage(basic)
    return wage * PF_EMPLOYEE_RATE, wage * PF_EMPLOYER_RATE


def state_insurance(gross: Decimal, enabled: bool) -> tuple[Decimal, Decimal]:
    """Return (employee, employer) monthly ESI contributions on gross."""
    if not enabled:
        return ZERO, ZERO
    return gross * ESI_EMPLOYEE_RATE, gross * ESI_EMPLOYER_RATE


def gratuity_provision(basic: Decimal, include_pf: bool, include_esi: bool) -> Decimal:
    """Annual gratuity provision on annual basic.

    Only recognised when both PF and ESI are enabled.
    """
    if not (include_pf and include_esi):
        return ZERO
    return basic * MONTHS_PER_YEAR * GRATUITY_RATE_ANNUAL


def professional_tax(gross: Decimal, override: Decimal = ZERO) -> Decimal:
    """Monthly professional tax: a positive override wins, else the two-tier default."""
    if override > 0:
        return override
    if gross > PROFESSIONAL_TAX_THRESHOLD:
        return PROFESSIONAL_TAX_DEFAULT
    return ZERO


def tds(gross: Decimal, percent: Decimal) -> Decimal:
    """Flat monthly withholding as a percentage of gross."""
    return gross * percent / HUNDRED


def implied_annual_ctc(
    gross: Decimal,
    employer_pf: Decimal,
    employer_esi: Decimal,
    gratuity_annual: Decimal,
) -> Decimal:
    """Employer's annual outlay for a monthly structure."""
    return (
        gross * MONTHS_PER_YEAR
        + employer_pf * MONTHS_PER_YEAR
        + employer_esi * MONTHS_PER_YEAR
        + gratuity_annual
    )


def compute_contributions(
    basic: Decimal,
    gross: Decimal,
    include_pf: bool,
    include_esi: bool,
) -> StatutoryContributions:
    """Compute every contribution that feeds back into CTC."""
    employee_pf, employer_pf = provident_fund(basic, include_pf)
    employee_esi, employer_esi = state_insurance(gross, include_esi)
    return StatutoryContributions(
        gross=gross,
        employee_provident_fund=employee_pf,
        employer_provident_fund=employer_pf,
        employee_state_insurance=employee_esi,
        employer_state_insurance=employer_esi,
        gratuity_annual_provision=gratuity_provision(basic, include_pf, include_esi),
    )
