from __future__ import annotations

from datetime import datetime
from typing import Collection, Optional, Protocol, Sequence

from ..core.enums import RequestKind, RequestStatus
from .model import RequestRecord


class RequestRepository(Protocol):
    def add(self, record: RequestRecord) -> None:
        raise NotImplementedError

    def get(self, request_id: str) -> Optional[RequestRecord]:
        raise NotImplementedError

    def list(
        self,
        *,
        subject_employee_ids: Optional[Collection[str]] = None,
        kind: Optional[RequestKind] = None,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[RequestRecord]:
        """Return matching records ordered by (created_at, request_id)."""

        raise NotImplementedError

    def mark_decided(
        self,
        *,
        request_id: str,
        status: RequestStatus,
        decided_by: str,
        decided_at: datetime,
    ) -> bool:
        """Atomically move a PENDING request to `status`.

        Returns False when the request is missing or no longer PENDING.
        """

        raise NotImplementedError
