from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Mapping, NamedTuple, Optional

from ..common.datetime_utils import coerce_date, coerce_time
from ..common.validators import require_non_empty
from ..common.values import DateRange
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceEntry:
    """Domain entity: one employee's attendance for one calendar date.

    (employee_id, work_date) is the natural key.
    """

    employee_id: str
    work_date: date
    check_in: Optional[time]
    check_out: Optional[time]
    status: AttendanceStatus
    work_minutes: int = 0
    status_set_by: Optional[str] = None
    note: Optional[str] = None

    def __post_init__(self) -> None:
        if self.work_minutes < 0:
            raise ValueError("work_minutes cannot be negative")
        if self.check_out is not None and self.check_in is None:
            raise ValueError("check_out requires check_in")
        if self.check_in and self.check_out and self.check_out < self.check_in:
            raise ValueError("check_out cannot precede check_in")

    @property
    def key(self) -> tuple[str, date]:
        return self.employee_id, self.work_date

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "work_date": self.work_date.isoformat(),
            "check_in": self.check_in.strftime("%H:%M:%S") if self.check_in else None,
            "check_out": self.check_out.strftime("%H:%M:%S") if self.check_out else None,
            "status": self.status.value,
            "work_minutes": self.work_minutes,
            "status_set_by": self.status_set_by,
            "note": self.note,
        }


@dataclass(frozen=True)
class ImportRow:
    """A row supplied by an import source (biometric sheet, spreadsheet, ...)."""

    employee_id: str
    work_date: date
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    status: Optional[AttendanceStatus] = None

    @classmethod
    def coerce(cls, row: "ImportRow | Mapping[str, Any]") -> "ImportRow":
        if isinstance(row, ImportRow):
            return row
        if not isinstance(row, Mapping):
            raise ValidationError("Import row must be a mapping")

        raw_status = row.get("status")
        status = None
        if raw_status not in (None, ""):
            try:
                status = AttendanceStatus(str(raw_status).strip().upper())
            except ValueError:
                raise ValidationError(f"Unknown attendance status: {raw_status!r}")

        return cls(
            employee_id=require_non_empty(str(row.get("employee_id") or ""), "employee_id"),
            work_date=coerce_date(row.get("work_date"), "work_date"),
            check_in=coerce_time(row.get("check_in"), "check_in"),
            check_out=coerce_time(row.get("check_out"), "check_out"),
            status=status,
        )


def _plain_row(row: Any) -> Any:
    if isinstance(row, ImportRow):
        row = {
            "employee_id": row.employee_id,
            "work_date": row.work_date,
            "check_in": row.check_in,
            "check_out": row.check_out,
            "status": row.status.value if row.status else None,
        }
    if not isinstance(row, Mapping):
        return repr(row)
    return {k: v.isoformat() if hasattr(v, "isoformat") else v for k, v in row.items()}


class RejectedRow(NamedTuple):
    row: Any
    error: Exception

    @property
    def reason(self) -> str:
        return type(self.error).__name__


@dataclass(frozen=True)
class ImportResult:
    accepted: int
    rejected: list[RejectedRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "accepted": self.accepted,
            "rejected": [
                {"row": _plain_row(r.row), "reason": r.reason, "message": str(r.error)}
                for r in self.rejected
            ],
        }


@dataclass(frozen=True)
class AttendanceSummary:
    """Aggregate over a date range, used for personal and team reporting."""

    date_range: DateRange
    total_entries: int
    total_work_minutes: int
    count_by_status: Mapping[AttendanceStatus, int]

    def to_dict(self) -> dict:
        return {
            "start": self.date_range.start.isoformat(),
            "end": self.date_range.end.isoformat(),
            "total_entries": self.total_entries,
            "total_work_minutes": self.total_work_minutes,
            "count_by_status": {s.value: n for s, n in self.count_by_status.items()},
        }
