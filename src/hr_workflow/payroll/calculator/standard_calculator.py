from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Sequence

from ...common.validators import require_non_negative
from ...core.enums import AdjustmentKind
from ...core.exceptions import ValidationError
from ..model import Adjustment, BreakdownItem, PayrollResult
from .base import PayrollCalculator

HUNDRED = Decimal("100")

LABELS = {
    AdjustmentKind.INCREMENT_PERCENT: "Increment",
    AdjustmentKind.REFERRAL_BONUS: "Referral Bonus",
    AdjustmentKind.DEDUCTION: "Deduction",
    AdjustmentKind.TAX: "Tax",
}


def _as_adjustment(item: Adjustment | Mapping[str, Any]) -> Adjustment:
    if isinstance(item, Adjustment):
        # Adjustment(...) built directly skips the sign check in Adjustment.of.
        return Adjustment.of(item.kind, item.value)
    if isinstance(item, Mapping):
        return Adjustment.from_dict(item)
    raise ValidationError(f"Unsupported adjustment: {item!r}")


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: base, then increments, referral bonuses, deductions and taxes.

    Every percentage applies to the original base (no compounding). No
    rounding happens here; display formatting belongs to the caller.
    """

    def compute_net(self, base_amount: Decimal | Any, adjustments: Sequence[Adjustment | Mapping[str, Any]]) -> PayrollResult:
        base = require_non_negative(base_amount, "base_amount")
        items = [_as_adjustment(a) for a in adjustments]

        breakdown = [BreakdownItem("Base", base)]
        for adj in items:
            if adj.kind == AdjustmentKind.INCREMENT_PERCENT:
                breakdown.append(BreakdownItem(LABELS[adj.kind], base * adj.value / HUNDRED))
        for adj in items:
            if adj.kind == AdjustmentKind.REFERRAL_BONUS:
                breakdown.append(BreakdownItem(LABELS[adj.kind], adj.value))
        for adj in items:
            if adj.kind in (AdjustmentKind.DEDUCTION, AdjustmentKind.TAX):
                breakdown.append(BreakdownItem(LABELS[adj.kind], -adj.value))

        net = sum((item.amount for item in breakdown), Decimal("0"))
        return PayrollResult(net_amount=net, breakdown=tuple(breakdown))


def compute_net(base_amount: Decimal | Any, adjustments: Sequence[Adjustment | Mapping[str, Any]]) -> PayrollResult:
    return StandardPayrollCalculator().compute_net(base_amount, adjustments)
