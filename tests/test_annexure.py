"""Unit tests for the salary annexure."""

import base64
from decimal import Decimal

from compensation_engine.calculators.engine import CompensationEngine
from compensation_engine.calculators.gst import contract_gst
from compensation_engine.calculators.types import MonthlyBreakdown
from compensation_engine.documents.annexure import (
    DATA_URI_PREFIX,
    StatementExtras,
    StatementRenderer,
    annexure_filename,
    build_annexure,
)
from tests.conftest import make_policy


def _breakdown() -> MonthlyBreakdown:
    return CompensationEngine().decompose(make_policy())


class TestRenderText:
    """Field order, labels and formatting."""

    def test_core_lines(self):
        text = StatementRenderer().render_text("Asha Rao", Decimal("1200000"), _breakdown())
        lines = text.split("\n")

        assert lines[0] == "Annexure - Salary Breakdown for Asha Rao"
        assert lines[1] == ""
        assert lines[2:16] == [
            "Basic (monthly): 50000.00",
            "HRA (monthly): 5000.00",
            "Conveyance (monthly): 1000.00",
            "Telephone (monthly): 500.00",
            "Medical Allowance (monthly): 1250.00",
            "Special Allowance (monthly): 40450.00",
            "Gross (monthly): 98200.00",
            "Net (monthly): 96200.00",
            "Employee PF (monthly): 1800.00",
            "Employer PF (monthly): 1800.00",
            "Employee ESI (monthly): 0.00",
            "Employer ESI (monthly): 0.00",
            "Gratuity provision (annual): 0.00",
            "Professional Tax (monthly): 200.00",
        ]
        assert lines[-3:] == [
            "CTC (annual): 1200000.00",
            "",
            "This annexure is generated automatically by EcoVale HR.",
        ]

    def test_deterministic(self):
        renderer = StatementRenderer()
        breakdown = _breakdown()
        assert renderer.render_text("A", 1200000, breakdown) == renderer.render_text(
            "A", 1200000, breakdown
        )

    def test_gst_block_for_contracts(self):
        extras = StatementExtras(gst=contract_gst(Decimal("1200000")))
        text = StatementRenderer().render_text("Vendor", Decimal("1200000"), _breakdown(), extras)

        assert "GST (monthly): 18000.00" in text
        assert "GST (annual): 216000.00" in text
        assert "Total (CTC + GST) (annual): 1416000.00" in text
        assert "Total (CTC + GST) (monthly): 118000.00" in text

    def test_optional_blocks_absent_by_default(self):
        text = StatementRenderer().render_text("A", 1200000, _breakdown())

        assert "GST" not in text
        assert "Professional Fees" not in text
        assert "TDS (%)" not in text
        assert "TDS (monthly): 0.00" in text

    def test_professional_fees_and_tds_percent(self):
        extras = StatementExtras(
            tds_percent=Decimal("5"),
            professional_fees_monthly=Decimal("2500"),
            professional_fees_inclusive=True,
        )
        text = StatementRenderer(issuer="Acme Payroll").render_text(
            "A", 1200000, _breakdown(), extras
        )

        assert "TDS (%): 5.00" in text
        assert "Professional Fees (monthly): 2500.00" in text
        assert "Professional Fees inclusive flag: true" in text
        assert "Professional Fees (annual): 30000.00" in text
        assert text.endswith("generated automatically by Acme Payroll.")

    def test_blank_name(self):
        text = StatementRenderer().render_text("  ", 0, MonthlyBreakdown())
        assert text.startswith("Annexure - Salary Breakdown for Employee\n")


class TestExport:
    """Download filename and data URI."""

    def test_filename_replaces_whitespace(self):
        assert annexure_filename("Asha  Rao\tKumar") == "Annexure_Asha_Rao_Kumar.txt"
        assert annexure_filename("") == "Annexure_Employee.txt"

    def test_data_uri_decodes_to_text(self):
        document = build_annexure("Zoë Dsouza", Decimal("1200000"), _breakdown())

        assert document.filename == "Annexure_Zoë_Dsouza.txt"
        assert document.data_uri.startswith(DATA_URI_PREFIX)
        payload = document.data_uri[len(DATA_URI_PREFIX):]
        assert base64.b64decode(payload).decode("utf-8") == document.text
