"""Compensation engine command line interface.

Provides tools for:
- Monthly breakdown of an annual CTC
- Annual view of the same breakdown
- Salary annexure export
- GST on an amount
- Pro-rated payslip for one month

Usage:
    compensation-engine breakdown --ctc 1200000 --hra-percent 10 --pf
    compensation-engine annual --ctc 1200000 --pf --esi
    compensation-engine annexure --name "Asha Rao" --ctc 600000 --output annexure.txt
    compensation-engine gst --amount 100000 --percent 18
    compensation-engine payslip --ctc 600000 --pf --working-days 26 --present 24 --absent 2
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable

from compensation_engine.calculators.engine import CompensationEngine
from compensation_engine.calculators.gst import UnsupportedGstRateError, calculate_gst, gst_for_engagement
from compensation_engine.calculators.payslip import AttendanceSummary, PayslipBuilder
from compensation_engine.calculators.types import (
    CompensationPolicy,
    EmploymentType,
    FixedAllowances,
)
from compensation_engine.config import configure_logging, get_settings
from compensation_engine.documents.annexure import (
    StatementExtras,
    build_annexure,
    format_amount,
)

logger = logging.getLogger(__name__)


def parse_decimal(s: str) -> Decimal:
    """Parse a decimal argument."""
    try:
        value = Decimal(s)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {s!r}")
    if not value.is_finite():
        raise argparse.ArgumentTypeError(f"invalid amount: {s!r}")
    return value


def parse_non_negative(s: str) -> Decimal:
    """Parse a non-negative decimal argument."""
    value = parse_decimal(s)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {s}")
    return value


def _json_default(value: Any) -> str:
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2, default=_json_default)


class CompensationCli:
    """Compensation engine command line interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()
        self.engine = CompensationEngine()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="compensation-engine",
            description="CTC decomposition tools",
        )
        parser.add_argument(
            "--log-level",
            type=str,
            choices=["DEBUG", "INFO", "WARNING", "ERROR"],
            help="Logging level (default: $LOG_LEVEL)",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # breakdown command
        breakdown = subparsers.add_parser(
            "breakdown",
            help="Monthly breakdown of an annual CTC",
        )
        self._add_policy_arguments(breakdown)
        breakdown.add_argument(
            "--format",
            type=str,
            choices=["json", "text"],
            default="json",
            help="Output format",
        )

        # annual command
        annual = subparsers.add_parser(
            "annual",
            help="Monthly and annual views of the breakdown",
        )
        self._add_policy_arguments(annual)

        # annexure command
        annexure = subparsers.add_parser(
            "annexure",
            help="Render the salary annexure",
        )
        self._add_policy_arguments(annexure)
        annexure.add_argument(
            "--name",
            type=str,
            default="",
            help="Employee display name",
        )
        annexure.add_argument(
            "--employment-type",
            type=str,
            choices=[t.value for t in EmploymentType],
            default=EmploymentType.FULL_TIME.value,
            help="Engagement type; contract engagements carry GST",
        )
        annexure.add_argument(
            "--gst-percent",
            type=parse_decimal,
            help="GST rate for contract engagements (default: $CONTRACT_GST_PERCENT)",
        )
        annexure.add_argument(
            "--professional-fees",
            type=parse_non_negative,
            help="Monthly professional fees",
        )
        annexure.add_argument(
            "--fees-inclusive",
            action="store_true",
            help="Professional fees are GST inclusive",
        )
        annexure.add_argument(
            "--output",
            type=str,
            help="Write the annexure to this file, or a directory for the default filename",
        )
        annexure.add_argument(
            "--data-uri",
            action="store_true",
            help="Print the base64 data URI instead of the text",
        )

        # gst command
        gst = subparsers.add_parser(
            "gst",
            help="GST on an amount",
        )
        gst.add_argument(
            "--amount",
            type=parse_non_negative,
            required=True,
            help="Base amount",
        )
        gst.add_argument(
            "--percent",
            type=parse_decimal,
            default=Decimal("18"),
            help="GST rate: 5, 12, 18 or 28 (default: 18)",
        )

        # payslip command
        payslip = subparsers.add_parser(
            "payslip",
            help="Pro-rated payslip for one month",
        )
        self._add_policy_arguments(payslip)
        payslip.add_argument("--working-days", type=int, help="Total working days")
        payslip.add_argument("--present", type=parse_non_negative, default=Decimal("0"))
        payslip.add_argument("--paid-leave", type=parse_non_negative, default=Decimal("0"))
        payslip.add_argument("--unpaid-leave", type=parse_non_negative, default=Decimal("0"))
        payslip.add_argument("--absent", type=parse_non_negative, default=Decimal("0"))
        payslip.add_argument("--advance", type=parse_non_negative, default=Decimal("0"))
        payslip.add_argument("--loan", type=parse_non_negative, default=Decimal("0"))

        return parser

    @staticmethod
    def _add_policy_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--ctc",
            type=parse_non_negative,
            required=True,
            help="Annual cost to company",
        )
        parser.add_argument(
            "--hra-percent",
            type=parse_non_negative,
            default=Decimal("0"),
            help="HRA as a percentage of monthly basic",
        )
        parser.add_argument("--conveyance", type=parse_non_negative, default=Decimal("0"))
        parser.add_argument("--telephone", type=parse_non_negative, default=Decimal("0"))
        parser.add_argument("--medical", type=parse_non_negative, default=Decimal("0"))
        parser.add_argument("--pf", action="store_true", help="Include Provident Fund")
        parser.add_argument("--esi", action="store_true", help="Include State Insurance")
        parser.add_argument(
            "--pt",
            type=parse_non_negative,
            default=Decimal("0"),
            help="Professional tax override (0 uses the default rule)",
        )
        parser.add_argument(
            "--tds",
            type=parse_non_negative,
            default=Decimal("0"),
            help="TDS as a percentage of gross",
        )

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)
        configure_logging(parsed.log_level)

        if not parsed.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        handlers: dict[str, Callable[[argparse.Namespace], int]] = {
            "breakdown": self._cmd_breakdown,
            "annual": self._cmd_annual,
            "annexure": self._cmd_annexure,
            "gst": self._cmd_gst,
            "payslip": self._cmd_payslip,
        }

        handler = handlers[parsed.command]
        try:
            return handler(parsed)
        except UnsupportedGstRateError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        except OSError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1

    @staticmethod
    def _policy(args: argparse.Namespace) -> CompensationPolicy:
        return CompensationPolicy(
            annual_ctc=args.ctc,
            hra_percentage=args.hra_percent,
            allowances=FixedAllowances(
                conveyance=args.conveyance,
                telephone=args.telephone,
                medical=args.medical,
            ),
            include_provident_fund=args.pf,
            include_state_insurance=args.esi,
            professional_tax_override=args.pt,
            tds_percent=args.tds,
        )

    def _cmd_breakdown(self, args: argparse.Namespace) -> int:
        """Print the monthly breakdown."""
        report = self.engine.solve(self._policy(args))

        if args.format == "text":
            for name, value in report.breakdown.to_dict().items():
                print(f"{name:<28} {format_amount(value):>14}")
            print(f"{'iterations':<28} {report.iterations:>14}")
            if report.infeasible:
                print("WARNING: fixed components exceed CTC; special allowance clamped to 0")
            return 0

        print(
            _dump(
                {
                    "annual_ctc": report.annual_ctc,
                    "monthly": report.breakdown.to_dict(),
                    "iterations": report.iterations,
                    "converged": report.converged,
                    "clamped": report.clamped,
                    "fingerprint": report.fingerprint,
                }
            )
        )
        return 0

    def _cmd_annual(self, args: argparse.Namespace) -> int:
        """Print monthly and annual views."""
        view = self.engine.to_annual_view(self._policy(args))
        print(
            _dump(
                {
                    "annual_ctc": view.annual_ctc,
                    "monthly_ctc": view.monthly_ctc,
                    "monthly": view.monthly.to_dict(),
                    "annual": view.annual.to_dict(),
                }
            )
        )
        return 0

    def _cmd_annexure(self, args: argparse.Namespace) -> int:
        """Render the annexure to stdout or a file."""
        settings = get_settings()
        policy = self._policy(args)
        gst_percent = (
            args.gst_percent if args.gst_percent is not None else settings.contract_gst_percent
        )
        extras = StatementExtras(
            tds_percent=policy.tds_percent,
            gst=gst_for_engagement(args.employment_type, policy.annual_ctc, gst_percent),
            professional_fees_monthly=args.professional_fees,
            professional_fees_inclusive=args.fees_inclusive,
        )
        document = build_annexure(
            args.name,
            policy.annual_ctc,
            self.engine.decompose(policy),
            extras,
            issuer=settings.statement_issuer,
        )
        content = document.data_uri if args.data_uri else document.text

        if args.output:
            path = Path(args.output)
            if path.is_dir():
                path = path / document.filename
            path.write_text(content + "\n", encoding="utf-8")
            logger.info("Wrote annexure to %s", path)
            print(f"Wrote {path}")
        else:
            print(content)
        return 0

    def _cmd_gst(self, args: argparse.Namespace) -> int:
        """Print GST on an amount."""
        print(_dump(asdict(calculate_gst(args.amount, args.percent))))
        return 0

    def _cmd_payslip(self, args: argparse.Namespace) -> int:
        """Print a pro-rated payslip."""
        attendance = None
        if args.working_days is not None:
            attendance = AttendanceSummary(
                total_working_days=args.working_days,
                present_days=args.present,
                paid_leave=args.paid_leave,
                unpaid_leave=args.unpaid_leave,
                absent_days=args.absent,
            )
        slip = PayslipBuilder().build(
            self.engine.decompose(self._policy(args)),
            attendance,
            advance_deduction=args.advance,
            loan_deduction=args.loan,
        )
        print(
            _dump(
                {
                    "total_working_days": slip.total_working_days,
                    "payable_days": slip.payable_days,
                    "loss_of_pay_days": slip.loss_of_pay_days,
                    "loss_of_pay_amount": slip.loss_of_pay_amount,
                    "lines": [
                        {
                            "line_type": line.line_type.value,
                            "code": line.code,
                            "label": line.label,
                            "amount": line.amount,
                        }
                        for line in slip.lines
                    ],
                    "gross": slip.gross,
                    "total_deductions": slip.total_deductions,
                    "net_pay": slip.net_pay,
                }
            )
        )
        return 0


def main() -> int:
    """CLI entry point."""
    cli = CompensationCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
