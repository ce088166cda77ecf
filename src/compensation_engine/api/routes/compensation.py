"""Compensation API endpoints."""

import logging

from fastapi import APIRouter, HTTPException, status

from compensation_engine.api.dependencies import AppSettings, Engine
from compensation_engine.api.schemas import (
    AnnexureRequest,
    AnnexureResponse,
    AnnualViewResponse,
    BreakdownFields,
    BreakdownResponse,
    ErrorResponse,
    GstRequest,
    GstResponse,
    PayslipLineResponse,
    PayslipRequest,
    PayslipResponse,
    PolicyRequest,
)
from compensation_engine.calculators.gst import (
    UnsupportedGstRateError,
    calculate_gst,
    gst_for_engagement,
)
from compensation_engine.calculators.payslip import PayslipBuilder
from compensation_engine.documents.annexure import StatementExtras, build_annexure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/compensation", tags=["compensation"])


# ============================================================================
# Decomposition
# ============================================================================


@router.post("/breakdown", response_model=BreakdownResponse)
def breakdown(engine: Engine, payload: PolicyRequest) -> BreakdownResponse:
    """Decompose annual CTC into a monthly pay structure."""
    report = engine.solve(payload.to_policy())
    return BreakdownResponse(
        annual_ctc=report.annual_ctc,
        monthly=BreakdownFields.model_validate(report.breakdown),
        implied_annual_ctc=report.breakdown.implied_annual_ctc,
        iterations=report.iterations,
        converged=report.converged,
        clamped=report.clamped,
        fingerprint=report.fingerprint,
    )


@router.post("/annual-view", response_model=AnnualViewResponse)
def annual_view(engine: Engine, payload: PolicyRequest) -> AnnualViewResponse:
    """Monthly and annual views of the breakdown."""
    view = engine.to_annual_view(payload.to_policy())
    return AnnualViewResponse(
        annual_ctc=view.annual_ctc,
        monthly_ctc=view.monthly_ctc,
        monthly=BreakdownFields.model_validate(view.monthly),
        annual=BreakdownFields.model_validate(view.annual),
    )


# ============================================================================
# Documents
# ============================================================================


@router.post(
    "/annexure",
    response_model=AnnexureResponse,
    responses={400: {"model": ErrorResponse}},
)
def annexure(
    engine: Engine,
    settings: AppSettings,
    payload: AnnexureRequest,
) -> AnnexureResponse:
    """Render the salary annexure and its download data URI."""
    policy = payload.policy.to_policy()
    monthly = engine.decompose(policy)
    gst_percent = (
        payload.gst_percent
        if payload.gst_percent is not None
        else settings.contract_gst_percent
    )

    try:
        gst = gst_for_engagement(payload.employment_type, policy.annual_ctc, gst_percent)
    except UnsupportedGstRateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    extras = StatementExtras(
        tds_percent=policy.tds_percent,
        gst=gst,
        professional_fees_monthly=payload.professional_fees_monthly,
        professional_fees_inclusive=payload.professional_fees_inclusive,
    )
    document = build_annexure(
        payload.name,
        policy.annual_ctc,
        monthly,
        extras,
        issuer=settings.statement_issuer,
    )
    logger.info("Rendered annexure %s", document.filename)
    return AnnexureResponse(
        filename=document.filename,
        text=document.text,
        data_uri=document.data_uri,
    )


# ============================================================================
# GST
# ============================================================================


@router.post(
    "/gst",
    response_model=GstResponse,
    responses={400: {"model": ErrorResponse}},
)
def gst(payload: GstRequest) -> GstResponse:
    """GST and GST-inclusive total on an amount."""
    try:
        result = calculate_gst(payload.amount, payload.percent)
    except UnsupportedGstRateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return GstResponse.model_validate(result)


# ============================================================================
# Payslip
# ============================================================================


@router.post("/payslip", response_model=PayslipResponse)
def payslip(engine: Engine, payload: PayslipRequest) -> PayslipResponse:
    """Pro-rated payslip for one month of attendance."""
    monthly = engine.decompose(payload.policy.to_policy())
    attendance = payload.attendance.to_summary() if payload.attendance else None
    slip = PayslipBuilder().build(
        monthly,
        attendance,
        advance_deduction=payload.advance_deduction,
        loan_deduction=payload.loan_deduction,
    )
    return PayslipResponse(
        total_working_days=slip.total_working_days,
        payable_days=slip.payable_days,
        loss_of_pay_days=slip.loss_of_pay_days,
        loss_of_pay_amount=slip.loss_of_pay_amount,
        lines=[
            PayslipLineResponse(
                line_type=line.line_type.value,
                code=line.code,
                label=line.label,
                amount=line.amount,
            )
            for line in slip.lines
        ],
        gross=slip.gross,
        total_deductions=slip.total_deductions,
        net_pay=slip.net_pay,
    )
