"""Single-employee payslip from a monthly breakdown and attendance.

Loss-of-pay days reduce basic at a per-day rate; every other component is
pro-rated by the share of payable days. Advance and loan recoveries are taken
as given.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from compensation_engine.calculators.constants import DEFAULT_WORKING_DAYS, ZERO
from compensation_engine.calculators.types import (
    LineCandidate,
    LineType,
    MonthlyBreakdown,
    round_to_cents,
    to_decimal,
)


@dataclass(frozen=True)
class AttendanceSummary:
    """Attendance for one employee and month."""

    total_working_days: int = DEFAULT_WORKING_DAYS
    present_days: Decimal = ZERO
    paid_leave: Decimal = ZERO
    unpaid_leave: Decimal = ZERO
    absent_days: Decimal = ZERO

    def __post_init__(self) -> None:
        for name in ("present_days", "paid_leave", "unpaid_leave", "absent_days"):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))

    @property
    def payable_days(self) -> Decimal:
        return self.present_days + self.paid_leave

    @property
    def loss_of_pay_days(self) -> Decimal:
        return self.unpaid_leave + self.absent_days


@dataclass(frozen=True)
class Payslip:
    """Pay lines and totals for one month."""

    total_working_days: Decimal
    payable_days: Decimal
    loss_of_pay_days: Decimal
    loss_of_pay_amount: Decimal
    lines: list[LineCandidate] = field(default_factory=list)

    @property
    def gross(self) -> Decimal:
        return sum(
            (line.amount for line in self.lines if line.line_type == LineType.EARNING),
            ZERO,
        )

    @property
    def total_deductions(self) -> Decimal:
        return -sum(
            (line.amount for line in self.lines if line.line_type != LineType.EARNING),
            ZERO,
        )

    @property
    def net_pay(self) -> Decimal:
        return sum((line.amount for line in self.lines), ZERO)

    def line(self, code: str) -> LineCandidate | None:
        return next((line for line in self.lines if line.code == code), None)


class PayslipBuilder:
    """Builds a payslip from a breakdown.

    Line order is stable: earnings, recoveries, statutory contributions, taxes.
    Zero-amount deduction lines are omitted; earning lines are always present.
    """

    def build(
        self,
        breakdown: MonthlyBreakdown,
        attendance: AttendanceSummary | None = None,
        advance_deduction: Any = ZERO,
        loan_deduction: Any = ZERO,
    ) -> Payslip:
        working_days, payable_days, lop_days = self._resolve_days(attendance)

        per_day_basic = breakdown.basic / working_days
        lop_amount = lop_days * per_day_basic
        ratio = payable_days / working_days

        lines = [
            self._earning("BASIC", "Basic", breakdown.basic - lop_amount),
            self._earning("HRA", "HRA", breakdown.hra * ratio),
            self._earning("CONVEYANCE", "Conveyance", breakdown.conveyance * ratio),
            self._earning("TELEPHONE", "Telephone", breakdown.telephone * ratio),
            self._earning("MEDICAL", "Medical Allowance", breakdown.medical * ratio),
            self._earning(
                "SPECIAL", "Special Allowance", breakdown.special_allowance * ratio
            ),
        ]

        deductions = [
            (LineType.DEDUCTION, "ADVANCE", "Advance Deduction", to_decimal(advance_deduction)),
            (LineType.DEDUCTION, "LOAN", "Loan EMI", to_decimal(loan_deduction)),
            (
                LineType.STATUTORY,
                "PF",
                "Employee PF",
                breakdown.employee_provident_fund * ratio,
            ),
            (
                LineType.STATUTORY,
                "ESI",
                "Employee ESI",
                breakdown.employee_state_insurance * ratio,
            ),
            (LineType.TAX, "PT", "Professional Tax", breakdown.professional_tax * ratio),
            (LineType.TAX, "TDS", "TDS", breakdown.tds_monthly * ratio),
        ]
        for line_type, code, label, amount in deductions:
            amount = round_to_cents(abs(amount))
            if amount > 0:
                lines.append(LineCandidate(line_type, code, label, -amount))

        return Payslip(
            total_working_days=working_days,
            payable_days=payable_days,
            loss_of_pay_days=lop_days,
            loss_of_pay_amount=round_to_cents(lop_amount),
            lines=lines,
        )

    @staticmethod
    def _earning(code: str, label: str, amount: Decimal) -> LineCandidate:
        return LineCandidate(LineType.EARNING, code, label, round_to_cents(amount))

    @staticmethod
    def _resolve_days(
        attendance: AttendanceSummary | None,
    ) -> tuple[Decimal, Decimal, Decimal]:
        """Return (working, payable, loss-of-pay) days.

        Without attendance, or with no days recorded, the full month is payable.
        """
        if attendance is None:
            days = Decimal(DEFAULT_WORKING_DAYS)
            return days, days, ZERO

        working = Decimal(attendance.total_working_days)
        if working <= 0:
            working = Decimal(DEFAULT_WORKING_DAYS)

        payable = attendance.payable_days
        if payable <= 0 and attendance.loss_of_pay_days <= 0:
            payable = working
        return working, payable, attendance.loss_of_pay_days


def build_payslip(
    breakdown: MonthlyBreakdown,
    attendance: AttendanceSummary | None = None,
    advance_deduction: Any = ZERO,
    loan_deduction: Any = ZERO,
) -> Payslip:
    """Build a payslip with the default builder."""
    return PayslipBuilder().build(breakdown, attendance, advance_deduction, loan_deduction)
