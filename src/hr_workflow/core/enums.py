from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried by a Principal."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class RequestKind(str, Enum):
    LEAVE = "LEAVE"
    ATTENDANCE_CORRECTION = "ATTENDANCE_CORRECTION"
    PROJECT_ASSIGNMENT = "PROJECT_ASSIGNMENT"


class RequestStatus(str, Enum):
    """Approval workflow status (leave/correction/assignment)."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class AttendanceStatus(str, Enum):
    """Attendance status stored per employee per day."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    SICK = "SICK"


class AdjustmentKind(str, Enum):
    INCREMENT_PERCENT = "INCREMENT_PERCENT"
    REFERRAL_BONUS = "REFERRAL_BONUS"
    DEDUCTION = "DEDUCTION"
    TAX = "TAX"
