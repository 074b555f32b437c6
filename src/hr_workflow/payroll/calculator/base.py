from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Sequence

from ..model import Adjustment, PayrollResult


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute_net(self, base_amount: Decimal | Any, adjustments: Sequence[Adjustment]) -> PayrollResult:
        raise NotImplementedError
