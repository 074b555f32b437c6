from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status at check-in."""

    @abstractmethod
    def decide_checkin(self, *, at: time, shift_start: Optional[time], grace_minutes: int) -> StatusDecision:
        raise NotImplementedError
