"""Type definitions for the compensation pipeline."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field, fields
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping

from compensation_engine.calculators.constants import CENT, MONTHS_PER_YEAR, ZERO


def to_decimal(value: Any) -> Decimal:
    """Coerce a loosely typed numeric input to Decimal.

    None, blank strings, unparsable text, NaN and infinities all become zero.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        result = Decimal(int(value))
    else:
        text = str(value).strip()
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except InvalidOperation:
            return ZERO
    if not result.is_finite():
        return ZERO
    return result


_FALSE_STRINGS = frozenset({"", "0", "false", "no", "n", "off"})


def to_bool(value: Any) -> bool:
    """Coerce a loosely typed flag to bool.

    None and the strings "false", "no", "off", "0" and "" (any case) are False.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def round_to_cents(amount: Decimal) -> Decimal:
    """Round amount to 2 decimal places."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def _set(instance: Any, name: str, value: Any) -> None:
    object.__setattr__(instance, name, value)


class EmploymentType(str, Enum):
    """Engagement types. GST applies only to contract engagements."""

    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"


@dataclass(frozen=True)
class FixedAllowances:
    """Monthly allowances supplied by the caller and held constant."""

    conveyance: Decimal = ZERO
    telephone: Decimal = ZERO
    medical: Decimal = ZERO

    def __post_init__(self) -> None:
        for f in fields(self):
            _set(self, f.name, to_decimal(getattr(self, f.name)))

    @property
    def total(self) -> Decimal:
        return self.conveyance + self.telephone + self.medical


# Field names used by the employee record store, mapped to policy fields.
_RECORD_ALIASES = {
    "ctc": "annual_ctc",
    "annualCTC": "annual_ctc",
    "hraPercentage": "hra_percentage",
    "includePF": "include_provident_fund",
    "includeProvidentFund": "include_provident_fund",
    "includeESI": "include_state_insurance",
    "includeStateInsurance": "include_state_insurance",
    "pt": "professional_tax_override",
    "professionalTaxOverride": "professional_tax_override",
    "tds": "tds_percent",
    "tdsPercent": "tds_percent",
}

_ALLOWANCE_ALIASES = {
    "conveyance": "conveyance",
    "telephone": "telephone",
    "medical": "medical",
    "medicalAllowance": "medical",
    "medical_allowance": "medical",
}


@dataclass(frozen=True)
class CompensationPolicy:
    """Inputs for a single-employee CTC decomposition.

    Numeric fields are coerced with `to_decimal` and flags with `to_bool`, so
    partially filled employee records can be passed straight through.
    """

    annual_ctc: Decimal = ZERO
    hra_percentage: Decimal = ZERO
    allowances: FixedAllowances = field(default_factory=FixedAllowances)
    include_provident_fund: bool = False
    include_state_insurance: bool = False
    professional_tax_override: Decimal = ZERO
    tds_percent: Decimal = ZERO

    def __post_init__(self) -> None:
        _set(self, "annual_ctc", to_decimal(self.annual_ctc))
        _set(self, "hra_percentage", to_decimal(self.hra_percentage))
        _set(self, "professional_tax_override", to_decimal(self.professional_tax_override))
        _set(self, "tds_percent", to_decimal(self.tds_percent))
        _set(self, "include_provident_fund", to_bool(self.include_provident_fund))
        _set(self, "include_state_insurance", to_bool(self.include_state_insurance))

        allowances = self.allowances
        if allowances is None:
            allowances = FixedAllowances()
        elif isinstance(allowances, Mapping):
            allowances = FixedAllowances(**_pick(allowances, _ALLOWANCE_ALIASES))
        _set(self, "allowances", allowances)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CompensationPolicy:
        """Build a policy from snake_case keys or employee record field names."""
        values = _pick(data, {**_RECORD_ALIASES, **{f.name: f.name for f in fields(cls)}})
        if "allowances" not in values:
            values["allowances"] = _pick(data, _ALLOWANCE_ALIASES)
        return cls(**values)

    def to_canonical_dict(self) -> dict[str, Any]:
        """Return canonical dict for hashing (deterministic ordering)."""
        return {
            "annual_ctc": str(self.annual_ctc),
            "hra_percentage": str(self.hra_percentage),
            "conveyance": str(self.allowances.conveyance),
            "telephone": str(self.allowances.telephone),
            "medical": str(self.allowances.medical),
            "include_provident_fund": self.include_provident_fund,
            "include_state_insurance": self.include_state_insurance,
            "professional_tax_override": str(self.professional_tax_override),
            "tds_percent": str(self.tds_percent),
        }

    def fingerprint(self) -> str:
        """Stable hash of the policy inputs."""
        json_str = json.dumps(self.to_canonical_dict(), sort_keys=True)
        return hashlib.sha256(json_str.encode()).hexdigest()[:32]


def _pick(data: Mapping[str, Any], aliases: Mapping[str, str]) -> dict[str, Any]:
    picked: dict[str, Any] = {}
    for key, target in aliases.items():
        if key in data and target not in picked:
            picked[target] = data[key]
    return picked


@dataclass(frozen=True)
class MonthlyBreakdown:
    """Monthly pay structure derived from a policy.

    `gratuity_annual_provision` is the only annual figure.
    """

    basic: Decimal = ZERO
    hra: Decimal = ZERO
    conveyance: Decimal = ZERO
    telephone: Decimal = ZERO
    medical: Decimal = ZERO
    special_allowance: Decimal = ZERO
    gross: Decimal = ZERO
    employee_provident_fund: Decimal = ZERO
    employer_provident_fund: Decimal = ZERO
    employee_state_insurance: Decimal = ZERO
    employer_state_insurance: Decimal = ZERO
    gratuity_annual_provision: Decimal = ZERO
    tds_monthly: Decimal = ZERO
    professional_tax: Decimal = ZERO
    net_pay: Decimal = ZERO

    @property
    def implied_annual_ctc(self) -> Decimal:
        """Employer's total annual outlay for this structure."""
        monthly_cost = self.gross + self.employer_provident_fund + self.employer_state_insurance
        return monthly_cost * MONTHS_PER_YEAR + self.gratuity_annual_provision

    def to_dict(self) -> dict[str, Decimal]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class AnnualBreakdown:
    """Annual counterpart of a MonthlyBreakdown."""

    basic: Decimal = ZERO
    hra: Decimal = ZERO
    conveyance: Decimal = ZERO
    telephone: Decimal = ZERO
    medical: Decimal = ZERO
    special_allowance: Decimal = ZERO
    gross: Decimal = ZERO
    employee_provident_fund: Decimal = ZERO
    employer_provident_fund: Decimal = ZERO
    employee_state_insurance: Decimal = ZERO
    employer_state_insurance: Decimal = ZERO
    gratuity_annual_provision: Decimal = ZERO
    tds_monthly: Decimal = ZERO
    professional_tax: Decimal = ZERO
    net_pay: Decimal = ZERO

    @classmethod
    def from_monthly(cls, monthly: MonthlyBreakdown) -> AnnualBreakdown:
        """Scale every monthly figure by 12; gratuity is already annual."""
        values = {
            name: amount * MONTHS_PER_YEAR for name, amount in monthly.to_dict().items()
        }
        values["gratuity_annual_provision"] = monthly.gratuity_annual_provision
        return cls(**values)

    def to_dict(self) -> dict[str, Decimal]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class CompensationView:
    """Monthly and annual views of the same decomposition."""

    annual_ctc: Decimal
    monthly_ctc: Decimal
    monthly: MonthlyBreakdown
    annual: AnnualBreakdown


@dataclass(frozen=True)
class DecompositionReport:
    """Breakdown plus diagnostics from the convergence loop."""

    annual_ctc: Decimal
    breakdown: MonthlyBreakdown
    iterations: int
    converged: bool
    clamped: bool
    fingerprint: str

    @property
    def residual(self) -> Decimal:
        """Target CTC minus the outlay the breakdown actually implies."""
        return self.annual_ctc - self.breakdown.implied_annual_ctc

    @property
    def infeasible(self) -> bool:
        """Fixed components already exceed the target monthly cost."""
        return self.clamped


class LineType(str, Enum):
    """Payslip line item types."""

    EARNING = "EARNING"
    DEDUCTION = "DEDUCTION"
    STATUTORY = "STATUTORY"
    TAX = "TAX"


@dataclass(frozen=True)
class LineCandidate:
    """A payslip line item.

    Sign conventions: earnings positive, everything else negative.
    """

    line_type: LineType
    code: str
    label: str
    amount: Decimal

    def to_canonical_dict(self) -> dict[str, Any]:
        """Return canonical dict for hashing (deterministic ordering)."""
        return {
            "line_type": self.line_type.value,
            "code": self.code,
            "amount": str(self.amount),
        }
