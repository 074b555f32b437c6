from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """On-time check-in, or no shift to compare against."""

    def decide_checkin(self, *, at: time, shift_start: Optional[time], grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
