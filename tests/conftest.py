from __future__ import annotations

from datetime import datetime, time, timedelta

import pytest

from hr_workflow.core.enums import Role
from hr_workflow.core.principal import Principal
from hr_workflow.employees.memory_employee_repository import InMemoryEmployeeDirectory
from hr_workflow.employees.model import Employee


@pytest.fixture
def employees():
    return InMemoryEmployeeDirectory(
        [
            Employee(employee_id="EMP01", full_name="Dharshan", department="IT", shift_start=time(9, 0)),
            Employee(employee_id="EMP02", full_name="Jayasri", department="IT"),
            Employee(employee_id="EMP03", full_name="Arun", department="Marketing"),
            Employee(employee_id="ADM01", full_name="Admin", department="HR"),
        ]
    )


@pytest.fixture
def admin():
    return Principal(employee_id="ADM01", role=Role.ADMIN, department="HR")


@pytest.fixture
def manager():
    return Principal(employee_id="MGR01", role=Role.MANAGER, department="IT")


class StepClock:
    """Deterministic clock: each call advances one minute."""

    def __init__(self, start: datetime = datetime(2026, 2, 1, 9, 0)):
        self._now = start

    def __call__(self) -> datetime:
        current = self._now
        self._now += timedelta(minutes=1)
        return current


@pytest.fixture
def clock():
    return StepClock()
