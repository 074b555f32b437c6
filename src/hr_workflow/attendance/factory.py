from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, at: time, shift_start: Optional[time], grace_minutes: int) -> AttendanceStrategy:
        if not shift_start:
            return PresentStrategy()

        anchor = date(2000, 1, 1)
        deadline = datetime.combine(anchor, shift_start) + timedelta(minutes=grace_minutes)
        if datetime.combine(anchor, at) <= deadline:
            return PresentStrategy()
        return LateStrategy()
