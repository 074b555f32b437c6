from __future__ import annotations

import logging
from datetime import date, time
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_date, coerce_time, minutes_between
from ..common.validators import optional_text, require_non_empty
from ..common.values import DateRange
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    DomainError,
    DuplicateEntryError,
    InvalidTimeError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from ..core.principal import Principal
from ..employees.model import Employee
from ..employees.repository import EmployeeDirectory
from .factory import AttendanceStrategyFactory
from .model import AttendanceEntry, AttendanceSummary, ImportResult, ImportRow, RejectedRow
from .repository import AttendanceRepository
from .strategies.base import StatusDecision

logger = logging.getLogger(__name__)


def _coerce_status(status: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus(status)
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {status!r}")


def _work_minutes(check_in: time, check_out: time) -> int:
    if check_out < check_in:
        raise InvalidTimeError(
            f"Check-out {check_out.strftime('%H:%M')} is earlier than check-in {check_in.strftime('%H:%M')}"
        )
    return minutes_between(check_in, check_out)


class AttendanceLedger:
    """Per-employee, per-day attendance records and their aggregates."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeDirectory,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    ):
        self._attendance = attendance
        self._employees = employees
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._grace_minutes = int(grace_minutes)

    def _require_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")
        return employee

    def _checkin_decision(self, employee: Employee, at: time) -> StatusDecision:
        strategy = self._factory.for_checkin(at=at, shift_start=employee.shift_start, grace_minutes=self._grace_minutes)
        return strategy.decide_checkin(at=at, shift_start=employee.shift_start, grace_minutes=self._grace_minutes)

    def check_in(self, employee_id: str, work_date: date | str, at: time | str) -> AttendanceEntry:
        work_date = coerce_date(work_date, "work_date")
        at = coerce_time(at, "check_in")
        if at is None:
            raise ValidationError("check_in time is required")
        employee = self._require_employee(employee_id)

        existing = self._attendance.get(employee_id, work_date)
        if existing and existing.check_in is not None:
            raise DuplicateEntryError(f"{employee_id} already checked in on {work_date.isoformat()}")

        decision = self._checkin_decision(employee, at)
        if existing:
            ok = self._attendance.record_check_in(
                employee_id=employee_id, work_date=work_date, check_in=at, status=decision.status, note=decision.note
            )
        else:
            ok = self._attendance.add(
                AttendanceEntry(
                    employee_id=employee_id,
                    work_date=work_date,
                    check_in=at,
                    check_out=None,
                    status=decision.status,
                    note=decision.note,
                )
            )
        if not ok:
            raise DuplicateEntryError(f"{employee_id} already checked in on {work_date.isoformat()}")

        logger.info("check-in %s %s at %s (%s)", employee_id, work_date.isoformat(), at.strftime("%H:%M"), decision.status.value)
        return self._attendance.get(employee_id, work_date)

    def check_out(self, employee_id: str, work_date: date | str, at: time | str) -> AttendanceEntry:
        work_date = coerce_date(work_date, "work_date")
        at = coerce_time(at, "check_out")
        if at is None:
            raise ValidationError("check_out time is required")

        entry = self._attendance.get(employee_id, work_date)
        if not entry:
            raise NotFoundError(f"No attendance entry for {employee_id} on {work_date.isoformat()}")
        if entry.check_in is None:
            raise InvalidTransitionError(f"{employee_id} has not checked in on {work_date.isoformat()}")
        if entry.check_out is not None:
            raise InvalidTransitionError(f"{employee_id} already checked out on {work_date.isoformat()}")

        minutes = _work_minutes(entry.check_in, at)
        ok = self._attendance.record_check_out(
            employee_id=employee_id, work_date=work_date, check_out=at, work_minutes=minutes
        )
        if not ok:
            raise InvalidTransitionError(f"{employee_id} already checked out on {work_date.isoformat()}")

        logger.info("check-out %s %s at %s (%d min)", employee_id, work_date.isoformat(), at.strftime("%H:%M"), minutes)
        return self._attendance.get(employee_id, work_date)

    def set_status(
        self,
        employee_id: str,
        work_date: date | str,
        status: AttendanceStatus | str,
        actor: Principal,
        *,
        note: Optional[str] = None,
    ) -> AttendanceEntry:
        """Administrative override; never touches check-in/out or work minutes."""

        work_date = coerce_date(work_date, "work_date")
        status = _coerce_status(status)
        self._require_employee(employee_id)

        entry = self._attendance.upsert_status(
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            set_by=actor.employee_id,
            note=optional_text(note, "note"),
        )
        logger.info("status %s %s -> %s by %s", employee_id, work_date.isoformat(), status.value, actor.employee_id)
        return entry

    def check_correction(
        self,
        employee_id: str,
        work_date: date | str,
        *,
        check_in: time | str | None = None,
        check_out: time | str | None = None,
    ) -> tuple[Optional[time], Optional[time], int]:
        """Resolve a correction against the stored entry without writing anything.

        Returns the resulting (check_in, check_out, work_minutes).
        """

        work_date = coerce_date(work_date, "work_date")
        entry = self._attendance.get(employee_id, work_date)
        if not entry:
            raise NotFoundError(f"No attendance entry for {employee_id} on {work_date.isoformat()}")

        new_in = coerce_time(check_in, "check_in") or entry.check_in
        new_out = coerce_time(check_out, "check_out") or entry.check_out
        if new_out is not None and new_in is None:
            raise InvalidTransitionError("A correction cannot set check_out without check_in")
        minutes = _work_minutes(new_in, new_out) if new_in and new_out else 0
        return new_in, new_out, minutes

    def correct_times(
        self,
        employee_id: str,
        work_date: date | str,
        *,
        check_in: time | str | None = None,
        check_out: time | str | None = None,
        note: Optional[str] = None,
    ) -> AttendanceEntry:
        """Apply an approved correction: replace the given times and recompute minutes."""

        work_date = coerce_date(work_date, "work_date")
        note = optional_text(note, "note")
        new_in, new_out, minutes = self.check_correction(
            employee_id, work_date, check_in=check_in, check_out=check_out
        )

        self._attendance.replace_times(
            employee_id=employee_id,
            work_date=work_date,
            check_in=new_in,
            check_out=new_out,
            work_minutes=minutes,
            note=note,
        )
        logger.info("times corrected %s %s (%d min)", employee_id, work_date.isoformat(), minutes)
        return self._attendance.get(employee_id, work_date)

    def _import_one(self, row: ImportRow, seen: set[tuple[str, date]]) -> None:
        employee = self._require_employee(row.employee_id)
        key = (row.employee_id, row.work_date)

        if row.check_out is not None and row.check_in is None:
            raise ValidationError("check_out given without check_in")
        minutes = _work_minutes(row.check_in, row.check_out) if row.check_in and row.check_out else 0

        if key in seen or self._attendance.get(*key):
            raise DuplicateEntryError(f"Entry for {row.employee_id} on {row.work_date.isoformat()} already exists")

        note = None
        if row.status is not None:
            status = row.status
        elif row.check_in is not None:
            decision = self._checkin_decision(employee, row.check_in)
            status, note = decision.status, decision.note
        else:
            status = AttendanceStatus.ABSENT

        entry = AttendanceEntry(
            employee_id=row.employee_id,
            work_date=row.work_date,
            check_in=row.check_in,
            check_out=row.check_out,
            status=status,
            work_minutes=minutes,
            note=note,
        )
        if not self._attendance.add(entry):
            raise DuplicateEntryError(f"Entry for {row.employee_id} on {row.work_date.isoformat()} already exists")
        seen.add(key)

    def bulk_import(self, rows: Iterable[ImportRow | Mapping[str, Any]]) -> ImportResult:
        """Import each row independently; failures are collected, never raised."""

        accepted = 0
        rejected: list[RejectedRow] = []
        seen: set[tuple[str, date]] = set()

        for index, raw in enumerate(rows, start=1):
            try:
                self._import_one(ImportRow.coerce(raw), seen)
            except DomainError as exc:
                logger.warning("import row %d rejected: %s", index, exc)
                rejected.append(RejectedRow(raw, exc))
                continue
            accepted += 1

        logger.info("import finished: %d accepted, %d rejected", accepted, len(rejected))
        return ImportResult(accepted=accepted, rejected=rejected)

    def history(self, employee_id: str, date_range: DateRange) -> Sequence[AttendanceEntry]:
        return self._attendance.list_entries(employee_ids=[employee_id], date_range=date_range)

    @staticmethod
    def _aggregate(entries: Sequence[AttendanceEntry], date_range: DateRange) -> AttendanceSummary:
        counts = {status: 0 for status in AttendanceStatus}
        for e in entries:
            counts[e.status] += 1
        return AttendanceSummary(
            date_range=date_range,
            total_entries=len(entries),
            total_work_minutes=sum(e.work_minutes for e in entries),
            count_by_status=counts,
        )

    def summarize(self, employee_id: str, date_range: DateRange) -> AttendanceSummary:
        employee_id = require_non_empty(employee_id, "employee_id")
        return self._aggregate(self.history(employee_id, date_range), date_range)

    def summarize_department(self, department: str, date_range: DateRange) -> AttendanceSummary:
        ids = [e.employee_id for e in self._employees.list_by_department(department)]
        return self._aggregate(self._attendance.list_entries(employee_ids=ids, date_range=date_range), date_range)
