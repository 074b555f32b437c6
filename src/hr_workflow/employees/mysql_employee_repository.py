from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_all, fetch_one, to_time
from .model import Employee
from .repository import EmployeeDirectory


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_employee(r: dict) -> Employee:
        return Employee(
            employee_id=str(r["employee_id"]),
            full_name=r["full_name"],
            department=r.get("department"),
            shift_start=to_time(r.get("shift_start")),
        )

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, department, shift_start
                FROM employees
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            return fetch_one(cur, self._to_employee)

    def list_by_department(self, department: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, department, shift_start
                FROM employees
                WHERE department=%s
                ORDER BY employee_id
                """,
                (department,),
            )
            return fetch_all(cur, self._to_employee)
