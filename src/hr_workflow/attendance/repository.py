from __future__ import annotations

from datetime import date, time
from typing import Collection, Optional, Protocol, Sequence

from ..common.values import DateRange
from ..core.enums import AttendanceStatus
from .model import AttendanceEntry


class AttendanceRepository(Protocol):
    def get(self, employee_id: str, work_date: date) -> Optional[AttendanceEntry]:
        raise NotImplementedError

    def add(self, entry: AttendanceEntry) -> bool:
        """Insert a new entry. Returns False if the natural key already exists."""

        raise NotImplementedError

    def record_check_in(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in: time,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> bool:
        """Fill check_in on an existing entry that has none yet. A given note replaces the stored one."""

        raise NotImplementedError

    def record_check_out(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_out: time,
        work_minutes: int,
    ) -> bool:
        """Fill check_out on a checked-in entry that has none yet."""

        raise NotImplementedError

    def upsert_status(
        self,
        *,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        set_by: str,
        note: Optional[str] = None,
    ) -> AttendanceEntry:
        """Admin-only override; creates a status-only entry when none exists."""

        raise NotImplementedError

    def replace_times(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in: Optional[time],
        check_out: Optional[time],
        work_minutes: int,
        note: Optional[str] = None,
    ) -> bool:
        """Admin-only override used after an approved correction request."""

        raise NotImplementedError

    def list_entries(self, *, employee_ids: Collection[str], date_range: DateRange) -> Sequence[AttendanceEntry]:
        """Entries in range ordered by (work_date, employee_id)."""

        raise NotImplementedError
