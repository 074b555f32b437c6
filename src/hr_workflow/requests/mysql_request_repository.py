from __future__ import annotations

import json
from datetime import datetime
from typing import Collection, Optional, Sequence

from ..core.enums import RequestKind, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_all, fetch_one, load_json
from .model import RequestRecord
from .repository import RequestRepository

_COLUMNS = "request_id, subject_employee_id, kind, payload, status, created_at, decided_at, decided_by"


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_record(r: dict) -> RequestRecord:
        return RequestRecord(
            request_id=r["request_id"],
            subject_employee_id=r["subject_employee_id"],
            kind=RequestKind(r["kind"]),
            payload=load_json(r["payload"]),
            status=RequestStatus(r["status"]),
            created_at=r["created_at"],
            decided_at=r.get("decided_at"),
            decided_by=r.get("decided_by"),
        )

    def add(self, record: RequestRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO requests(request_id, subject_employee_id, kind, payload, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.request_id,
                    record.subject_employee_id,
                    record.kind.value,
                    json.dumps(dict(record.payload)),
                    record.status.value,
                    record.created_at,
                ),
            )

    def get(self, request_id: str) -> Optional[RequestRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM requests WHERE request_id=%s", (request_id,))
            return fetch_one(cur, self._to_record)

    def list(
        self,
        *,
        subject_employee_ids: Optional[Collection[str]] = None,
        kind: Optional[RequestKind] = None,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[RequestRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if subject_employee_ids is not None:
            ids = list(subject_employee_ids)
            if not ids:
                return []
            clauses.append(f"subject_employee_id IN ({','.join(['%s'] * len(ids))})")
            params.extend(ids)
        if kind is not None:
            clauses.append("kind=%s")
            params.append(kind.value)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM requests {where} ORDER BY created_at ASC, request_id ASC",
                tuple(params),
            )
            return fetch_all(cur, self._to_record)

    def mark_decided(
        self,
        *,
        request_id: str,
        status: RequestStatus,
        decided_by: str,
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE requests
                SET status=%s, decided_by=%s, decided_at=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, decided_by, decided_at, request_id, RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0
