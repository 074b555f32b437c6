from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .model import Employee
from .repository import EmployeeDirectory


class InMemoryEmployeeDirectory(EmployeeDirectory):
    def __init__(self, employees: Iterable[Employee] = ()):
        self._by_id: dict[str, Employee] = {e.employee_id: e for e in employees}

    def add(self, employee: Employee) -> None:
        self._by_id[employee.employee_id] = employee

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_by_department(self, department: str) -> Sequence[Employee]:
        return [e for e in self._by_id.values() if e.department == department]
