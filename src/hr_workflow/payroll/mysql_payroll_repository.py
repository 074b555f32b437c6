from __future__ import annotations

import json
from decimal import Decimal
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_one, load_json
from .model import Adjustment, PayPeriod, PayrollLine
from .repository import PayrollRepository


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, line: PayrollLine) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_lines(employee_id, period_year, period_month, base_amount, adjustments)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE base_amount=VALUES(base_amount), adjustments=VALUES(adjustments)
                """,
                (
                    line.employee_id,
                    line.period.year,
                    line.period.month,
                    line.base_amount,
                    json.dumps([a.to_dict() for a in line.adjustments]),
                ),
            )

    def get(self, employee_id: str, period: PayPeriod) -> Optional[PayrollLine]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, base_amount, adjustments
                FROM payroll_lines
                WHERE employee_id=%s AND period_year=%s AND period_month=%s
                """,
                (employee_id, period.year, period.month),
            )
            return fetch_one(
                cur,
                lambda r: PayrollLine(
                    employee_id=r["employee_id"],
                    period=period,
                    base_amount=Decimal(str(r["base_amount"])),
                    adjustments=tuple(Adjustment.from_dict(a) for a in load_json(r["adjustments"])),
                ),
            )
