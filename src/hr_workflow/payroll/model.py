from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Sequence

from ..common.validators import require_non_negative
from ..core.enums import AdjustmentKind
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Adjustment:
    """A named addition to (or subtraction from) a base amount.

    The sign comes from `kind`; `value` itself is never negative.
    """

    kind: AdjustmentKind
    value: Decimal

    @classmethod
    def of(cls, kind: AdjustmentKind | str, value: Any) -> "Adjustment":
        try:
            kind = AdjustmentKind(kind)
        except ValueError:
            raise ValidationError(f"Unknown adjustment kind: {kind!r}")
        return cls(kind=kind, value=require_non_negative(value, f"{kind.value} value"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Adjustment":
        if not isinstance(data, Mapping):
            raise ValidationError("Adjustment must be an object")
        return cls.of(data.get("kind"), data.get("value"))

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "value": str(self.value)}


@dataclass(frozen=True)
class BreakdownItem:
    label: str
    amount: Decimal

    def to_dict(self) -> dict:
        return {"label": self.label, "amount": str(self.amount)}


@dataclass(frozen=True)
class PayrollResult:
    net_amount: Decimal
    breakdown: tuple[BreakdownItem, ...]

    def to_dict(self) -> dict:
        return {
            "net_amount": str(self.net_amount),
            "breakdown": [item.to_dict() for item in self.breakdown],
        }


@dataclass(frozen=True)
class PayPeriod:
    month: int
    year: int

    def __post_init__(self) -> None:
        if not 1 <= int(self.month) <= 12:
            raise ValidationError("month must be between 1 and 12")
        if int(self.year) < 1:
            raise ValidationError("year must be positive")

    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class PayrollLine:
    """One employee's pay for one period.

    `net_amount` and `breakdown` are recomputed from the inputs on every read.
    """

    employee_id: str
    period: PayPeriod
    base_amount: Decimal
    adjustments: tuple[Adjustment, ...] = ()

    def _compute(self) -> PayrollResult:
        from .calculator.standard_calculator import StandardPayrollCalculator

        return StandardPayrollCalculator().compute_net(self.base_amount, self.adjustments)

    @property
    def net_amount(self) -> Decimal:
        return self._compute().net_amount

    @property
    def breakdown(self) -> Sequence[BreakdownItem]:
        return self._compute().breakdown

    def to_dict(self) -> dict:
        result = self._compute()
        return {
            "employee_id": self.employee_id,
            "period": self.period.label(),
            "base_amount": str(self.base_amount),
            "adjustments": [a.to_dict() for a in self.adjustments],
            **result.to_dict(),
        }


@dataclass(frozen=True)
class PeriodTotals:
    headcount: int
    total_net: Decimal
    average_net: Decimal

    def to_dict(self) -> dict:
        return {
            "headcount": self.headcount,
            "total_net": str(self.total_net),
            "average_net": str(self.average_net),
        }
