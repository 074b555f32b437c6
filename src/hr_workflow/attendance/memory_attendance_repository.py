from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, time
from typing import Collection, Optional, Sequence

from ..common.values import DateRange
from ..core.enums import AttendanceStatus
from .model import AttendanceEntry
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Thread-safe attendance store keyed by (employee_id, work_date)."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_key: dict[tuple[str, date], AttendanceEntry] = {}

    def get(self, employee_id: str, work_date: date) -> Optional[AttendanceEntry]:
        with self._lock:
            return self._by_key.get((employee_id, work_date))

    def add(self, entry: AttendanceEntry) -> bool:
        with self._lock:
            if entry.key in self._by_key:
                return False
            self._by_key[entry.key] = entry
            return True

    def record_check_in(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in: time,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> bool:
        with self._lock:
            current = self._by_key.get((employee_id, work_date))
            if not current or current.check_in is not None:
                return False
            self._by_key[current.key] = replace(
                current, check_in=check_in, status=status, note=note if note is not None else current.note
            )
            return True

    def record_check_out(self, *, employee_id: str, work_date: date, check_out: time, work_minutes: int) -> bool:
        with self._lock:
            current = self._by_key.get((employee_id, work_date))
            if not current or current.check_in is None or current.check_out is not None:
                return False
            self._by_key[current.key] = replace(current, check_out=check_out, work_minutes=work_minutes)
            return True

    def upsert_status(
        self,
        *,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        set_by: str,
        note: Optional[str] = None,
    ) -> AttendanceEntry:
        with self._lock:
            current = self._by_key.get((employee_id, work_date))
            if current:
                updated = replace(current, status=status, status_set_by=set_by, note=note if note is not None else current.note)
            else:
                updated = AttendanceEntry(
                    employee_id=employee_id,
                    work_date=work_date,
                    check_in=None,
                    check_out=None,
                    status=status,
                    status_set_by=set_by,
                    note=note,
                )
            self._by_key[updated.key] = updated
            return updated

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
        with self._lock:
            current = self._by_key.get((employee_id, work_date))
            if not current:
                return False
            self._by_key[current.key] = replace(
                current,
                check_in=check_in,
                check_out=check_out,
                work_minutes=work_minutes,
                note=note if note is not None else current.note,
            )
            return True

    def list_entries(self, *, employee_ids: Collection[str], date_range: DateRange) -> Sequence[AttendanceEntry]:
        wanted = set(employee_ids)
        with self._lock:
            items = [e for e in self._by_key.values() if e.employee_id in wanted and date_range.contains(e.work_date)]
        items.sort(key=lambda e: (e.work_date, e.employee_id))
        return items
