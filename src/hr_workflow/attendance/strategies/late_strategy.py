from __future__ import annotations

from datetime import time
from typing import Optional

from ...common.datetime_utils import minutes_between
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, at: time, shift_start: Optional[time], grace_minutes: int) -> StatusDecision:
        note = None
        if shift_start is not None:
            note = f"{minutes_between(shift_start, at)} min after shift start"
        return StatusDecision(status=AttendanceStatus.LATE, note=note)
