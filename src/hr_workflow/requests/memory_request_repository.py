from __future__ import annotations

import threading
from datetime import datetime
from typing import Collection, Optional, Sequence

from ..core.enums import RequestKind, RequestStatus
from .model import RequestRecord
from .repository import RequestRepository


class InMemoryRequestRepository(RequestRepository):
    """Thread-safe request store used by tests and the `memory` backend."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[str, RequestRecord] = {}

    def add(self, record: RequestRecord) -> None:
        with self._lock:
            if record.request_id in self._by_id:
                raise KeyError(record.request_id)
            self._by_id[record.request_id] = record

    def get(self, request_id: str) -> Optional[RequestRecord]:
        with self._lock:
            return self._by_id.get(request_id)

    def list(
        self,
        *,
        subject_employee_ids: Optional[Collection[str]] = None,
        kind: Optional[RequestKind] = None,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[RequestRecord]:
        with self._lock:
            items = list(self._by_id.values())

        if subject_employee_ids is not None:
            wanted = set(subject_employee_ids)
            items = [r for r in items if r.subject_employee_id in wanted]
        if kind is not None:
            items = [r for r in items if r.kind == kind]
        if status is not None:
            items = [r for r in items if r.status == status]

        items.sort(key=lambda r: (r.created_at, r.request_id))
        return items

    def mark_decided(
        self,
        *,
        request_id: str,
        status: RequestStatus,
        decided_by: str,
        decided_at: datetime,
    ) -> bool:
        with self._lock:
            current = self._by_id.get(request_id)
            if not current or not current.is_pending:
                return False
            self._by_id[request_id] = current.with_decision(status, decided_by=decided_by, decided_at=decided_at)
            return True
