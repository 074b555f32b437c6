"""Payload shapes per request kind.

Each validator receives the raw payload mapping and returns a normalised
dict (dates/times as ISO strings) or raises ValidationError.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from ..common.datetime_utils import coerce_date, coerce_time
from ..common.validators import optional_text, require_decimal, require_non_empty
from ..core.constants import LEAVE_TYPES
from ..core.enums import RequestKind
from ..core.exceptions import ValidationError

PayloadValidator = Callable[[Mapping[str, Any]], dict]


def _reject_unknown_keys(payload: Mapping[str, Any], allowed: set[str]) -> None:
    unknown = sorted(set(payload) - allowed)
    if unknown:
        raise ValidationError(f"Unexpected payload fields: {', '.join(unknown)}")


def validate_leave(payload: Mapping[str, Any]) -> dict:
    _reject_unknown_keys(payload, {"leave_type", "start_date", "end_date", "reason"})

    leave_type = require_non_empty(payload.get("leave_type"), "leave_type")
    if leave_type not in LEAVE_TYPES:
        raise ValidationError(f"leave_type must be one of: {', '.join(LEAVE_TYPES)}")

    start = coerce_date(payload.get("start_date"), "start_date")
    end = coerce_date(payload.get("end_date"), "end_date")
    if end < start:
        raise ValidationError("end_date must be on or after start_date")

    return {
        "leave_type": leave_type,
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "reason": require_non_empty(payload.get("reason"), "reason"),
    }


def validate_attendance_correction(payload: Mapping[str, Any]) -> dict:
    _reject_unknown_keys(payload, {"work_date", "check_in", "check_out", "note"})

    work_date = coerce_date(payload.get("work_date"), "work_date")
    check_in = coerce_time(payload.get("check_in"), "check_in")
    check_out = coerce_time(payload.get("check_out"), "check_out")
    note = optional_text(payload.get("note"), "note")

    if not check_in and not check_out and not note:
        raise ValidationError("At least one of check_in, check_out or note is required")
    if check_in and check_out and check_out < check_in:
        raise ValidationError("check_out cannot be earlier than check_in")

    return {
        "work_date": work_date.isoformat(),
        "check_in": check_in.strftime("%H:%M") if check_in else None,
        "check_out": check_out.strftime("%H:%M") if check_out else None,
        "note": note,
    }


def validate_project_assignment(payload: Mapping[str, Any]) -> dict:
    _reject_unknown_keys(payload, {"project_id", "module_name", "estimated_hours", "start_date", "end_date"})

    estimated = require_decimal(payload.get("estimated_hours"), "estimated_hours")
    if estimated <= 0:
        raise ValidationError("estimated_hours must be greater than zero")

    out = {
        "project_id": require_non_empty(str(payload.get("project_id") or ""), "project_id"),
        "module_name": require_non_empty(payload.get("module_name"), "module_name"),
        "estimated_hours": str(estimated),
        "start_date": None,
        "end_date": None,
    }

    start_raw, end_raw = payload.get("start_date"), payload.get("end_date")
    start = coerce_date(start_raw, "start_date") if start_raw else None
    end = coerce_date(end_raw, "end_date") if end_raw else None
    if start and end and end < start:
        raise ValidationError("end_date must be on or after start_date")
    out["start_date"] = start.isoformat() if start else None
    out["end_date"] = end.isoformat() if end else None
    return out


PAYLOAD_VALIDATORS: dict[RequestKind, PayloadValidator] = {
    RequestKind.LEAVE: validate_leave,
    RequestKind.ATTENDANCE_CORRECTION: validate_attendance_correction,
    RequestKind.PROJECT_ASSIGNMENT: validate_project_assignment,
}


def validate_payload(kind: RequestKind, payload: Mapping[str, Any]) -> dict:
    if not isinstance(payload, Mapping):
        raise ValidationError("payload must be an object")
    try:
        validator = PAYLOAD_VALIDATORS[kind]
    except KeyError:
        raise ValidationError(f"Unsupported request kind: {kind!r}")
    return validator(payload)
