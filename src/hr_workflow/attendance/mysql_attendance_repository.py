from __future__ import annotations

from datetime import date, time
from typing import Collection, Optional, Sequence

import mysql.connector

from ..common.values import DateRange
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_all, fetch_one, is_duplicate_key, to_time
from .model import AttendanceEntry
from .repository import AttendanceRepository

_COLUMNS = "employee_id, work_date, check_in, check_out, status, work_minutes, status_set_by, note"


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_entry(r: dict) -> AttendanceEntry:
        return AttendanceEntry(
            employee_id=str(r["employee_id"]),
            work_date=r["work_date"],
            check_in=to_time(r.get("check_in")),
            check_out=to_time(r.get("check_out")),
            status=AttendanceStatus(r["status"]),
            work_minutes=int(r.get("work_minutes") or 0),
            status_set_by=r.get("status_set_by"),
            note=r.get("note"),
        )

    def get(self, employee_id: str, work_date: date) -> Optional[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_entries WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            return fetch_one(cur, self._to_entry)

    def add(self, entry: AttendanceEntry) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    INSERT INTO attendance_entries({_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        entry.employee_id,
                        entry.work_date,
                        entry.check_in,
                        entry.check_out,
                        entry.status.value,
                        entry.work_minutes,
                        entry.status_set_by,
                        entry.note,
                    ),
                )
        except mysql.connector.Error as exc:
            if is_duplicate_key(exc):
                return False
            raise
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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_entries
                SET check_in=%s, status=%s, note=COALESCE(%s, note)
                WHERE employee_id=%s AND work_date=%s AND check_in IS NULL
                """,
                (check_in, status.value, note, employee_id, work_date),
            )
            return cur.rowcount > 0

    def record_check_out(self, *, employee_id: str, work_date: date, check_out: time, work_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_entries
                SET check_out=%s, work_minutes=%s
                WHERE employee_id=%s AND work_date=%s
                  AND check_in IS NOT NULL AND check_out IS NULL
                """,
                (check_out, int(work_minutes), employee_id, work_date),
            )
            return cur.rowcount > 0

    def upsert_status(
        self,
        *,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        set_by: str,
        note: Optional[str] = None,
    ) -> AttendanceEntry:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_entries(employee_id, work_date, status, work_minutes, status_set_by, note)
                VALUES(%s,%s,%s,0,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    status_set_by=VALUES(status_set_by),
                    note=COALESCE(VALUES(note), note)
                """,
                (employee_id, work_date, status.value, set_by, note),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_entries WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            return fetch_one(cur, self._to_entry)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_entries
                SET check_in=%s, check_out=%s, work_minutes=%s, note=COALESCE(%s, note)
                WHERE employee_id=%s AND work_date=%s
                """,
                (check_in, check_out, int(work_minutes), note, employee_id, work_date),
            )
            return cur.rowcount > 0

    def list_entries(self, *, employee_ids: Collection[str], date_range: DateRange) -> Sequence[AttendanceEntry]:
        ids = list(employee_ids)
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_entries
                WHERE employee_id IN ({','.join(['%s'] * len(ids))})
                  AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC, employee_id ASC
                """,
                (*ids, date_range.start, date_range.end),
            )
            return fetch_all(cur, self._to_entry)
