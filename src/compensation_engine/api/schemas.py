"""Pydantic schemas for API request/response models."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from compensation_engine.calculators.constants import CONTRACT_GST_PERCENT, DEFAULT_WORKING_DAYS
from compensation_engine.calculators.payslip import AttendanceSummary
from compensation_engine.calculators.types import (
    CompensationPolicy,
    EmploymentType,
    FixedAllowances,
)


# ============================================================================
# Policy schemas
# ============================================================================


class PolicyRequest(BaseModel):
    """CTC and policy flags for a decomposition."""

    annual_ctc: Decimal = Field(ge=0)
    hra_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    conveyance: Decimal = Field(default=Decimal("0"), ge=0)
    telephone: Decimal = Field(default=Decimal("0"), ge=0)
    medical: Decimal = Field(default=Decimal("0"), ge=0)
    include_provident_fund: bool = False
    include_state_insurance: bool = False
    professional_tax_override: Decimal = Field(default=Decimal("0"), ge=0)
    tds_percent: Decimal = Field(default=Decimal("0"), ge=0)

    def to_policy(self) -> CompensationPolicy:
        return CompensationPolicy(
            annual_ctc=self.annual_ctc,
            hra_percentage=self.hra_percentage,
            allowances=FixedAllowances(
                conveyance=self.conveyance,
                telephone=self.telephone,
                medical=self.medical,
            ),
            include_provident_fund=self.include_provident_fund,
            include_state_insurance=self.include_state_insurance,
            professional_tax_override=self.professional_tax_override,
            tds_percent=self.tds_percent,
        )


# ============================================================================
# Breakdown schemas
# ============================================================================


class BreakdownFields(BaseModel):
    """Every component of a breakdown."""

    model_config = ConfigDict(from_attributes=True)

    basic: Decimal
    hra: Decimal
    conveyance: Decimal
    telephone: Decimal
    medical: Decimal
    special_allowance: Decimal
    gross: Decimal
    employee_provident_fund: Decimal
    employer_provident_fund: Decimal
    employee_state_insurance: Decimal
    employer_state_insurance: Decimal
    gratuity_annual_provision: Decimal
    tds_monthly: Decimal
    professional_tax: Decimal
    net_pay: Decimal


class BreakdownResponse(BaseModel):
    """Monthly breakdown with convergence diagnostics."""

    annual_ctc: Decimal
    monthly: BreakdownFields
    implied_annual_ctc: Decimal
    iterations: int
    converged: bool
    clamped: bool
    fingerprint: str


class AnnualViewResponse(BaseModel):
    """Monthly and annual views of a breakdown."""

    annual_ctc: Decimal
    monthly_ctc: Decimal
    monthly: BreakdownFields
    annual: BreakdownFields


# ============================================================================
# Annexure schemas
# ============================================================================


class AnnexureRequest(BaseModel):
    """Statement export request."""

    name: str = ""
    policy: PolicyRequest
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    gst_percent: Decimal | None = None
    professional_fees_monthly: Decimal | None = Field(default=None, ge=0)
    professional_fees_inclusive: bool = False


class AnnexureResponse(BaseModel):
    """Rendered statement and its download form."""

    filename: str
    text: str
    data_uri: str


# ============================================================================
# GST schemas
# ============================================================================


class GstRequest(BaseModel):
    amount: Decimal = Field(ge=0)
    percent: Decimal = CONTRACT_GST_PERCENT


class GstResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    base: Decimal
    percent: Decimal
    gst: Decimal
    total: Decimal


# ============================================================================
# Payslip schemas
# ============================================================================


class AttendanceRequest(BaseModel):
    """Attendance for the month being paid."""

    total_working_days: int = Field(default=DEFAULT_WORKING_DAYS, ge=0)
    present_days: Decimal = Field(default=Decimal("0"), ge=0)
    paid_leave: Decimal = Field(default=Decimal("0"), ge=0)
    unpaid_leave: Decimal = Field(default=Decimal("0"), ge=0)
    absent_days: Decimal = Field(default=Decimal("0"), ge=0)

    def to_summary(self) -> AttendanceSummary:
        return AttendanceSummary(**self.model_dump())


class PayslipRequest(BaseModel):
    policy: PolicyRequest
    attendance: AttendanceRequest | None = None
    advance_deduction: Decimal = Field(default=Decimal("0"), ge=0)
    loan_deduction: Decimal = Field(default=Decimal("0"), ge=0)


class PayslipLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    line_type: str
    code: str
    label: str
    amount: Decimal


class PayslipResponse(BaseModel):
    total_working_days: Decimal
    payable_days: Decimal
    loss_of_pay_days: Decimal
    loss_of_pay_amount: Decimal
    lines: list[PayslipLineResponse]
    gross: Decimal
    total_deductions: Decimal
    net_pay: Decimal


# ============================================================================
# Error / health schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    code: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    engine_version: str
