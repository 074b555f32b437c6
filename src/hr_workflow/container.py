from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.importing import DEFAULT_COLUMN_MAPPING, SpreadsheetImportSource
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedger
from .core.constants import DEFAULT_EFFICIENCY_CEILING, DEFAULT_LATE_GRACE_MINUTES
from .database.connection import DatabaseConnection, DBConfig
from .employees.memory_employee_repository import InMemoryEmployeeDirectory
from .employees.mysql_employee_repository import MySQLEmployeeDirectory
from .employees.repository import EmployeeDirectory
from .notifications.notifier import LoggingNotifier, Notifier
from .payroll.memory_payroll_repository import InMemoryPayrollRepository
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .performance.efficiency import EfficiencyPolicy
from .requests.memory_request_repository import InMemoryRequestRepository
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.repository import RequestRepository
from .requests.service import RequestLifecycle


@dataclass(frozen=True)
class Container:
    employees: EmployeeDirectory
    requests_repo: RequestRepository
    attendance_repo: AttendanceRepository
    payroll_repo: PayrollRepository

    request_lifecycle: RequestLifecycle
    attendance_ledger: AttendanceLedger
    payroll_service: PayrollService
    efficiency_policy: EfficiencyPolicy
    import_source: SpreadsheetImportSource
    notifier: Notifier


def build_container(
    *,
    backend: str = "memory",
    db_config: Optional[dict] = None,
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    efficiency_ceiling: int = DEFAULT_EFFICIENCY_CEILING,
    employees: Optional[EmployeeDirectory] = None,
    notifier: Optional[Notifier] = None,
) -> Container:
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        employees = employees or MySQLEmployeeDirectory(conn)
        requests_repo = MySQLRequestRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        payroll_repo = MySQLPayrollRepository(conn)
    elif backend == "memory":
        employees = employees or InMemoryEmployeeDirectory()
        requests_repo = InMemoryRequestRepository()
        attendance_repo = InMemoryAttendanceRepository()
        payroll_repo = InMemoryPayrollRepository()
    else:
        raise ValueError(f"Unknown storage backend: {backend!r}")

    return Container(
        employees=employees,
        requests_repo=requests_repo,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
        request_lifecycle=RequestLifecycle(requests_repo, employees),
        attendance_ledger=AttendanceLedger(
            attendance_repo,
            employees,
            strategy_factory=AttendanceStrategyFactory(),
            grace_minutes=grace_minutes,
        ),
        payroll_service=PayrollService(employees, repository=payroll_repo),
        efficiency_policy=EfficiencyPolicy(ceiling=Decimal(efficiency_ceiling)),
        import_source=SpreadsheetImportSource(DEFAULT_COLUMN_MAPPING),
        notifier=notifier or LoggingNotifier(),
    )
