from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.enums import RequestKind, RequestStatus


@dataclass(frozen=True)
class RequestRecord:
    """Domain entity: an approvable request (leave, correction, assignment)."""

    request_id: str
    subject_employee_id: str
    kind: RequestKind
    payload: Mapping[str, Any]
    status: RequestStatus
    created_at: datetime
    decided_at: Optional[datetime] = None
    decided_by: Optional[str] = None

    def __post_init__(self) -> None:
        decided = self.decided_at is not None and self.decided_by is not None
        stamped = self.decided_at is not None or self.decided_by is not None
        if self.status == RequestStatus.PENDING and stamped:
            raise ValueError("A pending request cannot carry a decision stamp")
        if self.status != RequestStatus.PENDING and not decided:
            raise ValueError("A decided request must carry decided_at and decided_by")

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    def with_decision(self, status: RequestStatus, *, decided_by: str, decided_at: datetime) -> "RequestRecord":
        return replace(self, status=status, decided_by=decided_by, decided_at=decided_at)

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "subject_employee_id": self.subject_employee_id,
            "kind": self.kind.value,
            "payload": dict(self.payload),
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "decided_at": self.decided_at.isoformat() if self.decided_at else None,
            "decided_by": self.decided_by,
        }


@dataclass(frozen=True)
class StatusCounts:
    pending: int = 0
    approved: int = 0
    rejected: int = 0

    def to_dict(self) -> dict:
        return {
            RequestStatus.PENDING.value: self.pending,
            RequestStatus.APPROVED.value: self.approved,
            RequestStatus.REJECTED.value: self.rejected,
        }
