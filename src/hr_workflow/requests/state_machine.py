"""Request status state machine with transition validation."""

from __future__ import annotations

from ..core.enums import RequestStatus
from ..core.exceptions import InvalidTransitionError


class RequestStateMachine:
    """State machine for request status transitions.

    Allowed transitions:
    - PENDING → APPROVED
    - PENDING → REJECTED

    APPROVED and REJECTED are terminal.
    """

    VALID_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
        RequestStatus.PENDING: frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED}),
        RequestStatus.APPROVED: frozenset(),
        RequestStatus.REJECTED: frozenset(),
    }

    @classmethod
    def can_transition(cls, from_status: RequestStatus, to_status: RequestStatus) -> bool:
        return to_status in cls.VALID_TRANSITIONS.get(from_status, frozenset())

    @classmethod
    def validate_transition(cls, from_status: RequestStatus, to_status: RequestStatus) -> None:
        if not cls.can_transition(from_status, to_status):
            raise InvalidTransitionError(
                f"Invalid transition from '{from_status.value}' to '{to_status.value}'",
                from_status=from_status.value,
                to_status=to_status.value,
            )

    @classmethod
    def is_terminal(cls, status: RequestStatus) -> bool:
        return not cls.VALID_TRANSITIONS.get(status)
