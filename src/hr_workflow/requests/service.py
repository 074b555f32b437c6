from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import RequestKind, RequestStatus
from ..core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from ..core.principal import Principal
from ..employees.repository import EmployeeDirectory
from .model import RequestRecord, StatusCounts
from .payloads import validate_payload
from .repository import RequestRepository
from .state_machine import RequestStateMachine

logger = logging.getLogger(__name__)


def _coerce_kind(kind: Any) -> RequestKind:
    try:
        return RequestKind(kind)
    except ValueError:
        raise ValidationError(f"Unsupported request kind: {kind!r}")


def _coerce_status(status: Any, field_name: str = "status") -> RequestStatus:
    try:
        return RequestStatus(status)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {status!r}")


class RequestLifecycle:
    """Approval workflow shared by leave, attendance correction and project assignment requests.

    The lifecycle only mutates the request itself. Notifying anyone about the
    transition is left to the caller.
    """

    def __init__(
        self,
        requests: RequestRepository,
        employees: EmployeeDirectory,
        *,
        clock: Callable[[], datetime] = now_local,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._requests = requests
        self._employees = employees
        self._clock = clock
        self._new_id = id_factory

    def submit(self, subject_employee_id: str, kind: RequestKind | str, payload: Mapping[str, Any]) -> RequestRecord:
        subject_employee_id = require_non_empty(subject_employee_id, "subject_employee_id")
        kind = _coerce_kind(kind)
        normalized = validate_payload(kind, payload)

        if not self._employees.get_by_id(subject_employee_id):
            raise NotFoundError(f"Employee {subject_employee_id} does not exist")

        record = RequestRecord(
            request_id=self._new_id(),
            subject_employee_id=subject_employee_id,
            kind=kind,
            payload=normalized,
            status=RequestStatus.PENDING,
            created_at=self._clock(),
        )
        self._requests.add(record)
        logger.info("request %s submitted (%s for %s)", record.request_id, kind.value, subject_employee_id)
        return record

    def get(self, request_id: str) -> RequestRecord:
        record = self._requests.get(request_id)
        if not record:
            raise NotFoundError(f"Request {request_id} does not exist")
        return record

    def decide(self, request_id: str, outcome: RequestStatus | str, decided_by: Principal) -> RequestRecord:
        outcome = _coerce_status(outcome, "outcome")
        if outcome == RequestStatus.PENDING:
            raise ValidationError("outcome must be APPROVED or REJECTED")

        current = self.get(request_id)
        try:
            RequestStateMachine.validate_transition(current.status, outcome)
        except InvalidTransitionError:
            logger.warning("request %s already %s, refusing %s", request_id, current.status.value, outcome.value)
            raise

        decided_at = self._clock()
        ok = self._requests.mark_decided(
            request_id=request_id,
            status=outcome,
            decided_by=decided_by.employee_id,
            decided_at=decided_at,
        )
        if not ok:
            # Lost the race against a concurrent decision on the same request.
            latest = self.get(request_id)
            logger.warning("request %s decided concurrently as %s", request_id, latest.status.value)
            raise InvalidTransitionError(
                f"Request {request_id} was already decided as {latest.status.value}",
                from_status=latest.status.value,
                to_status=outcome.value,
            )

        logger.info("request %s %s by %s", request_id, outcome.value, decided_by.employee_id)
        return current.with_decision(outcome, decided_by=decided_by.employee_id, decided_at=decided_at)

    def list_for(
        self,
        *,
        employee_id: Optional[str] = None,
        department: Optional[str] = None,
        kind: RequestKind | str | None = None,
        status: RequestStatus | str | None = None,
    ) -> Sequence[RequestRecord]:
        """Requests filtered by subject employee, department and/or kind.

        Order is stable for unchanged data (creation time, then id).
        """

        subject_ids: Optional[set[str]] = None
        if employee_id is not None:
            subject_ids = {employee_id}
        if department is not None:
            in_department = {e.employee_id for e in self._employees.list_by_department(department)}
            subject_ids = in_department if subject_ids is None else subject_ids & in_department

        return self._requests.list(
            subject_employee_ids=subject_ids,
            kind=_coerce_kind(kind) if kind is not None else None,
            status=_coerce_status(status) if status is not None else None,
        )

    def count_by_status(self, employee_id: str, *, kind: RequestKind | str | None = None) -> StatusCounts:
        rows = self.list_for(employee_id=employee_id, kind=kind)
        return StatusCounts(
            pending=sum(1 for r in rows if r.status == RequestStatus.PENDING),
            approved=sum(1 for r in rows if r.status == RequestStatus.APPROVED),
            rejected=sum(1 for r in rows if r.status == RequestStatus.REJECTED),
        )
