from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .common.datetime_utils import resolve_timezone
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .timesheets.mysql_timesheet_repository import MySQLTimesheetRepository
from .timesheets.repository import TimesheetRepository
from .timesheets.service import TimesheetService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    timesheets_repo: TimesheetRepository

    employee_service: EmployeeService
    timesheet_service: TimesheetService


def build_container(*, db_config: dict, timezone_name: Optional[str] = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    timesheets_repo = MySQLTimesheetRepository(conn)

    employee_service = EmployeeService(employees_repo)
    timesheet_service = TimesheetService(timesheets_repo, employees_repo, tz=resolve_timezone(timezone_name))

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        timesheets_repo=timesheets_repo,
        employee_service=employee_service,
        timesheet_service=timesheet_service,
    )
