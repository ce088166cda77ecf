"""Salary annexure: plain-text statement of a breakdown and its download form."""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from compensation_engine.calculators.constants import MONTHS_PER_YEAR
from compensation_engine.calculators.gst import ContractGst
from compensation_engine.calculators.types import MonthlyBreakdown, round_to_cents, to_decimal

DEFAULT_ISSUER = "EcoVale HR"
DEFAULT_NAME = "Employee"
DATA_URI_PREFIX = "data:text/plain;base64,"

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class StatementExtras:
    """Optional blocks layered on top of the breakdown."""

    tds_percent: Decimal | None = None
    gst: ContractGst | None = None
    professional_fees_monthly: Decimal | None = None
    professional_fees_inclusive: bool = False


@dataclass(frozen=True)
class AnnexureDocument:
    """Rendered annexure ready for download."""

    filename: str
    text: str
    data_uri: str


def format_amount(value: Any) -> str:
    return str(round_to_cents(to_decimal(value)))


class StatementRenderer:
    """Renders a breakdown as a line-oriented text statement.

    Field order and labels are fixed; values are formatted, never computed,
    apart from the CTC + GST totals.
    """

    def __init__(self, issuer: str = DEFAULT_ISSUER):
        self.issuer = issuer

    def render_text(
        self,
        name: str,
        annual_ctc: Any,
        breakdown: MonthlyBreakdown,
        extras: StatementExtras | None = None,
    ) -> str:
        extras = extras or StatementExtras()
        ctc = to_decimal(annual_ctc)
        b = breakdown

        lines = [f"Annexure - Salary Breakdown for {display_name(name)}", ""]
        rows: list[tuple[str, Any]] = [
            ("Basic (monthly)", b.basic),
            ("HRA (monthly)", b.hra),
            ("Conveyance (monthly)", b.conveyance),
            ("Telephone (monthly)", b.telephone),
            ("Medical Allowance (monthly)", b.medical),
            ("Special Allowance (monthly)", b.special_allowance),
            ("Gross (monthly)", b.gross),
            ("Net (monthly)", b.net_pay),
            ("Employee PF (monthly)", b.employee_provident_fund),
            ("Employer PF (monthly)", b.employer_provident_fund),
            ("Employee ESI (monthly)", b.employee_state_insurance),
            ("Employer ESI (monthly)", b.employer_state_insurance),
            ("Gratuity provision (annual)", b.gratuity_annual_provision),
            ("Professional Tax (monthly)", b.professional_tax),
        ]
        if extras.tds_percent is not None:
            rows.append(("TDS (%)", extras.tds_percent))
        rows.append(("TDS (monthly)", b.tds_monthly))

        if extras.gst is not None:
            total = ctc + extras.gst.annual
            rows.extend(
                [
                    ("GST (monthly)", extras.gst.monthly),
                    ("GST (annual)", extras.gst.annual),
                    ("Total (CTC + GST) (annual)", total),
                    ("Total (CTC + GST) (monthly)", total / MONTHS_PER_YEAR),
                ]
            )

        lines.extend(f"{label}: {format_amount(value)}" for label, value in rows)

        if extras.professional_fees_monthly is not None:
            fees = to_decimal(extras.professional_fees_monthly)
            lines.append(f"Professional Fees (monthly): {format_amount(fees)}")
            inclusive = "true" if extras.professional_fees_inclusive else "false"
            lines.append(f"Professional Fees inclusive flag: {inclusive}")
            lines.append(
                f"Professional Fees (annual): {format_amount(fees * MONTHS_PER_YEAR)}"
            )

        lines.append(f"CTC (annual): {format_amount(ctc)}")
        lines.append("")
        lines.append(f"This annexure is generated automatically by {self.issuer}.")
        return "\n".join(lines)


def display_name(name: str | None) -> str:
    return (name or "").strip() or DEFAULT_NAME


def annexure_filename(name: str | None) -> str:
    """Download filename: whitespace runs in the name become underscores."""
    return "Annexure_" + _WHITESPACE.sub("_", display_name(name)) + ".txt"


def to_data_uri(text: str) -> str:
    """Encode UTF-8 text as a plain-text data URI."""
    return DATA_URI_PREFIX + base64.b64encode(text.encode("utf-8")).decode("ascii")


def build_annexure(
    name: str,
    annual_ctc: Any,
    breakdown: MonthlyBreakdown,
    extras: StatementExtras | None = None,
    issuer: str = DEFAULT_ISSUER,
) -> AnnexureDocument:
    """Render the statement and wrap it for download."""
    text = StatementRenderer(issuer).render_text(name, annual_ctc, breakdown, extras)
    return AnnexureDocument(
        filename=annexure_filename(name),
        text=text,
        data_uri=to_data_uri(text),
    )
