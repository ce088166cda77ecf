"""GST on contract engagements.

GST is not part of the CTC decomposition. It is charged on top of annual CTC
for contract-type engagements and shown as an extra block on the statement.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from compensation_engine.calculators.constants import (
    CONTRACT_GST_PERCENT,
    GST_RATES,
    HUNDRED,
    MONTHS_PER_YEAR,
)
from compensation_engine.calculators.types import EmploymentType, round_to_cents, to_decimal


class UnsupportedGstRateError(ValueError):
    """Raised when a GST percentage is not one of the supported slabs."""

    def __init__(self, percent: Decimal):
        self.percent = percent
        allowed = ", ".join(str(rate) for rate in GST_RATES)
        super().__init__(f"GST rate {percent}% is not supported (allowed: {allowed})")


@dataclass(frozen=True)
class GstResult:
    """GST charged on a single amount."""

    base: Decimal
    percent: Decimal
    gst: Decimal
    total: Decimal


@dataclass(frozen=True)
class ContractGst:
    """GST on annual CTC, with its monthly share."""

    percent: Decimal
    annual: Decimal
    monthly: Decimal


def _validate_rate(percent: Any) -> Decimal:
    rate = to_decimal(percent)
    if rate not in GST_RATES:
        raise UnsupportedGstRateError(rate)
    return rate


def calculate_gst(amount: Any, percent: Any = CONTRACT_GST_PERCENT) -> GstResult:
    """Compute GST and the GST-inclusive total on an amount."""
    rate = _validate_rate(percent)
    base = to_decimal(amount)
    gst = round_to_cents(base * rate / HUNDRED)
    return GstResult(base=base, percent=rate, gst=gst, total=round_to_cents(base + gst))


def contract_gst(annual_ctc: Any, percent: Any = CONTRACT_GST_PERCENT) -> ContractGst:
    """GST on annual CTC for a contract engagement."""
    rate = _validate_rate(percent)
    annual = round_to_cents(to_decimal(annual_ctc) * rate / HUNDRED)
    return ContractGst(
        percent=rate,
        annual=annual,
        monthly=round_to_cents(annual / MONTHS_PER_YEAR),
    )


def gst_for_engagement(
    employment_type: EmploymentType | str,
    annual_ctc: Any,
    percent: Any = CONTRACT_GST_PERCENT,
) -> ContractGst | None:
    """Contract GST for contract engagements, None for employees."""
    if EmploymentType(employment_type) is not EmploymentType.CONTRACT:
        return None
    return contract_gst(annual_ctc, percent)
