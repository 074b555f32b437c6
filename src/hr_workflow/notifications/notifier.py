from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

logger = logging.getLogger(__name__)

REQUEST_SUBMITTED = "request.submitted"
REQUEST_DECIDED = "request.decided"
ATTENDANCE_CHECKED_IN = "attendance.checked_in"
ATTENDANCE_CHECKED_OUT = "attendance.checked_out"
ATTENDANCE_STATUS_CHANGED = "attendance.status_changed"
ATTENDANCE_IMPORTED = "attendance.imported"


@dataclass(frozen=True)
class NotificationEvent:
    type: str
    subject_employee_id: str | None
    details: Mapping[str, Any] = field(default_factory=dict)


class Notifier(Protocol):
    def notify(self, event: NotificationEvent) -> None:
        raise NotImplementedError


class NullNotifier:
    def notify(self, event: NotificationEvent) -> None:
        return None


class LoggingNotifier:
    """Writes events to the log; stands in for mail/push delivery."""

    def __init__(self, name: str = "hr_workflow.events"):
        self._log = logging.getLogger(name)

    def notify(self, event: NotificationEvent) -> None:
        self._log.info("%s subject=%s details=%s", event.type, event.subject_employee_id, dict(event.details))


def notify_safely(notifier: Notifier, event: NotificationEvent) -> bool:
    """Fire-and-forget delivery: a failing notifier never undoes the transition."""

    try:
        notifier.notify(event)
    except Exception:
        logger.exception("notification %s for %s failed", event.type, event.subject_employee_id)
        return False
    return True
