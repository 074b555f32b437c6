"""Helpers shared by the Flask controllers.

Authentication itself happens upstream; the controllers only read the
principal that the login layer stored in the session.
"""

from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..core.principal import Principal
from .datetime_utils import coerce_date
from .values import DateRange


def current_principal() -> Optional[Principal]:
    employee_id = session.get("employee_id")
    if not employee_id:
        return None
    try:
        role = Role(str(session.get("role", Role.EMPLOYEE.value)).upper())
    except ValueError:
        role = Role.EMPLOYEE
    return Principal(employee_id=str(employee_id), role=role, department=session.get("department"))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        principal = current_principal()
        if principal is None:
            return jsonify({"error": "Unauthorized", "message": "Please sign in to continue"}), 401
        return view(principal, *args, **kwargs)

    return wrapper


def approver_required(view):
    @wraps(view)
    @login_required
    def wrapper(principal: Principal, *args, **kwargs):
        if not principal.can_approve:
            raise AuthorizationError("Only managers and admins can do this")
        return view(principal, *args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    @login_required
    def wrapper(principal: Principal, *args, **kwargs):
        if not principal.is_admin:
            raise AuthorizationError("Admin only")
        return view(principal, *args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def target_employee(principal: Principal, requested: Any) -> str:
    """Employees act on themselves; approvers may name someone else."""

    if requested in (None, "") or str(requested) == principal.employee_id:
        return principal.employee_id
    if not principal.can_approve:
        raise AuthorizationError("You can only access your own records")
    return str(requested)


def range_from_args(default_end: date) -> DateRange:
    start_s = request.args.get("start")
    end_s = request.args.get("end")
    end = coerce_date(end_s, "end") if end_s else default_end
    start = coerce_date(start_s, "start") if start_s else end.replace(day=1)
    return DateRange(start, end)
