"""CTC decomposition calculators."""

from compensation_engine.calculators.engine import (
    CompensationEngine,
    decompose,
    to_annual_view,
)
from compensation_engine.calculators.gst import calculate_gst, contract_gst
from compensation_engine.calculators.payslip import AttendanceSummary, PayslipBuilder
from compensation_engine.calculators.types import (
    AnnualBreakdown,
    CompensationPolicy,
    CompensationView,
    DecompositionReport,
    FixedAllowances,
    MonthlyBreakdown,
)

__all__ = [
    "AnnualBreakdown",
    "AttendanceSummary",
    "CompensationEngine",
    "CompensationPolicy",
    "CompensationView",
    "DecompositionReport",
    "FixedAllowances",
    "MonthlyBreakdown",
    "PayslipBuilder",
    "calculate_gst",
    "contract_gst",
    "decompose",
    "to_annual_view",
]
