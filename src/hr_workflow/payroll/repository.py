from __future__ import annotations

from typing import Optional, Protocol

from .model import PayPeriod, PayrollLine


class PayrollRepository(Protocol):
    """Stores payroll inputs; net amounts are never stored."""

    def save(self, line: PayrollLine) -> None:
        raise NotImplementedError

    def get(self, employee_id: str, period: PayPeriod) -> Optional[PayrollLine]:
        raise NotImplementedError
