from __future__ import annotations

import threading
from typing import Optional

from .model import PayPeriod, PayrollLine
from .repository import PayrollRepository


class InMemoryPayrollRepository(PayrollRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._lines: dict[tuple[str, PayPeriod], PayrollLine] = {}

    def save(self, line: PayrollLine) -> None:
        with self._lock:
            self._lines[(line.employee_id, line.period)] = line

    def get(self, employee_id: str, period: PayPeriod) -> Optional[PayrollLine]:
        with self._lock:
            return self._lines.get((employee_id, period))
