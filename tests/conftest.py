from __future__ import annotations

import io
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

import pytest
from PIL import Image

from hr_records.container import Container
from hr_records.employees.model import Employee, EmployeeProfile
from hr_records.employees.service import EmployeeService
from hr_records.timesheets.model import Timesheet
from hr_records.timesheets.service import TimesheetService


class InMemoryEmployees:
    def __init__(self, employees: Optional[list[Employee]] = None):
        self._rows: dict[int, Employee] = {e.employee_id: e for e in employees or []}
        self._next_id = max(self._rows, default=0) + 1
        self.create_calls = 0
        self.update_calls = 0

    def list_all(self):
        # Listings never carry attachments.
        return [replace(e, photo=None, document=None) for e in self._rows.values()]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._rows.get(int(employee_id))

    def exists(self, employee_id: int) -> bool:
        return int(employee_id) in self._rows

    def create(self, *, profile: EmployeeProfile, photo, document) -> int:
        self.create_calls += 1
        employee_id = self._next_id
        self._next_id += 1
        self._rows[employee_id] = Employee(employee_id=employee_id, photo=photo, document=document, **vars(profile))
        return employee_id

    def update(self, *, employee_id: int, profile: EmployeeProfile, photo=None, document=None) -> None:
        self.update_calls += 1
        current = self._rows[int(employee_id)]
        self._rows[int(employee_id)] = Employee(
            employee_id=int(employee_id),
            photo=photo if photo is not None else current.photo,
            document=document if document is not None else current.document,
            **vars(profile),
        )


class InMemoryTimesheets:
    def __init__(self, employees: InMemoryEmployees, timesheets: Optional[list[Timesheet]] = None):
        self._employees = employees
        self._rows: dict[int, Timesheet] = {t.timesheet_id: t for t in timesheets or []}
        self._next_id = max(self._rows, default=0) + 1

    def _joined(self, t: Timesheet) -> Timesheet:
        employee = self._employees.get_by_id(t.employee_id)
        return replace(t, employee_name=employee.full_name if employee else None)

    def list_with_employees(self):
        return [self._joined(t) for t in self._rows.values() if self._employees.exists(t.employee_id)]

    def get_by_id(self, timesheet_id: int) -> Optional[Timesheet]:
        t = self._rows.get(int(timesheet_id))
        return self._joined(t) if t else None

    def create(self, *, employee_id, start_time, end_time, total_hours, summary) -> int:
        timesheet_id = self._next_id
        self._next_id += 1
        self._rows[timesheet_id] = Timesheet(
            timesheet_id=timesheet_id,
            employee_id=int(employee_id),
            start_time=start_time,
            end_time=end_time,
            total_hours=float(total_hours),
            summary=summary,
        )
        return timesheet_id

    def update(self, *, timesheet_id, start_time, end_time, summary) -> None:
        current = self._rows[int(timesheet_id)]
        self._rows[int(timesheet_id)] = replace(current, start_time=start_time, end_time=end_time, summary=summary)


def make_employee(employee_id: int, full_name: str, position: str = "Engineer", **overrides) -> Employee:
    values = dict(
        employee_id=employee_id,
        full_name=full_name,
        email=f"{full_name.split()[0].lower()}@example.com",
        phone=None,
        position=position,
        department="R&D",
        salary=Decimal("50000"),
        hire_date=date(2020, 1, 1),
        date_of_birth=date(1990, 1, 1),
        address=None,
    )
    values.update(overrides)
    return Employee(**values)


@pytest.fixture
def employee_factory():
    return make_employee


@pytest.fixture
def fixed_today() -> date:
    return date(2026, 3, 15)


@pytest.fixture
def png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            make_employee(1, "Anna Schmidt", "Engineer"),
            make_employee(2, "John Carter", "Manager"),
            make_employee(3, "Joanna Lee", "Engineer"),
            make_employee(4, "Hannah Berg", "Designer"),
            make_employee(5, "Marek Nowak", "Accountant"),
        ]
    )


@pytest.fixture
def timesheets_repo(employees_repo) -> InMemoryTimesheets:
    return InMemoryTimesheets(
        employees_repo,
        [
            Timesheet(1, 1, datetime(2024, 1, 1, 9, 0), datetime(2024, 1, 1, 17, 0), 8.0, "Sprint planning"),
            Timesheet(2, 2, datetime(2024, 1, 2, 8, 30), datetime(2024, 1, 2, 16, 0), 7.5, "Ops review"),
            Timesheet(3, 3, datetime(2024, 1, 2, 10, 0), datetime(2024, 1, 2, 14, 45), 4.75, "Code review"),
        ],
    )


@pytest.fixture
def container(employees_repo, timesheets_repo) -> Container:
    return Container(
        conn=None,
        employees_repo=employees_repo,
        timesheets_repo=timesheets_repo,
        employee_service=EmployeeService(employees_repo),
        timesheet_service=TimesheetService(timesheets_repo, employees_repo, tz=timezone.utc),
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    from hr_records.main import create_app

    flask_app = create_app(container=container)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
