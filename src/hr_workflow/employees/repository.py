from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeDirectory(Protocol):
    """Read-only view of the employee records owned by the HR backend."""

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_by_department(self, department: str) -> Sequence[Employee]:
        raise NotImplementedError
