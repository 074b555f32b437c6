from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_non_negative
from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeDirectory
from .model import Adjustment, PayPeriod, PayrollLine, PeriodTotals
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollService:
    def __init__(self, employees: EmployeeDirectory, *, repository: Optional[PayrollRepository] = None):
        self._employees = employees
        self._repository = repository

    def compute_payslip(
        self,
        employee_id: str,
        period: PayPeriod,
        base_amount: Decimal | Any,
        adjustments: Sequence[Adjustment | Mapping[str, Any]] = (),
    ) -> PayrollLine:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError(f"Employee {employee_id} does not exist")

        line = PayrollLine(
            employee_id=employee_id,
            period=period,
            base_amount=require_non_negative(base_amount, "base_amount"),
            adjustments=tuple(a if isinstance(a, Adjustment) else Adjustment.from_dict(a) for a in adjustments),
        )
        net = line.net_amount  # validates every adjustment before anything is saved

        if self._repository is not None:
            self._repository.save(line)
        logger.info("payslip %s %s computed (net %s)", employee_id, period.label(), net)
        return line

    @staticmethod
    def period_totals(lines: Sequence[PayrollLine]) -> PeriodTotals:
        total = sum((line.net_amount for line in lines), Decimal("0"))
        average = total / len(lines) if lines else Decimal("0")
        return PeriodTotals(headcount=len(lines), total_net=total, average_net=average)
