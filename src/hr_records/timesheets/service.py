from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

from ..common.datetime_utils import format_local_input, hours_between, parse_datetime, to_local, to_utc
from ..core.constants import DISPLAY_DATETIME_FORMAT, HOURS_DISPLAY_DECIMALS
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Timesheet
from .repository import TimesheetRepository

logger = logging.getLogger(__name__)

FIELDS_REQUIRED_MESSAGE = "All fields are required."
INVALID_EMPLOYEE_MESSAGE = "Invalid employee selected."
INVALID_DATES_MESSAGE = "Invalid date format. Please select valid start and end times."
START_BEFORE_END_MESSAGE = "Start time must be before end time."


@dataclass(frozen=True)
class TimesheetOverview:
    """Table rows and calendar events built from one fetched list."""

    rows: list[dict]
    events: list[dict]
    employees: list[dict]


@dataclass(frozen=True)
class TimesheetView:
    timesheet_id: int
    employee_id: int
    employee_name: Optional[str]
    start_time: str
    end_time: str
    total_hours: float
    stored_total_hours: float
    summary: str


def live_total_hours(start: datetime, end: datetime) -> float:
    """Hours between ``start`` and ``end`` for display; 0 unless end is after start."""
    if end <= start:
        return 0.0
    return round(hours_between(start, end), HOURS_DISPLAY_DECIMALS)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class TimesheetService:
    """Use cases: list, view, create and edit timesheets.

    ``tz`` is the zone of form inputs and displayed times; the store keeps UTC.
    """

    def __init__(self, timesheets: TimesheetRepository, employees: EmployeeRepository, *, tz: Optional[tzinfo] = None):
        self._timesheets = timesheets
        self._employees = employees
        self._tz = tz

    def _display(self, value: datetime) -> str:
        return to_local(value, self._tz).strftime(DISPLAY_DATETIME_FORMAT)

    def _parse_pair(self, start_s: str, end_s: str) -> tuple[datetime, datetime]:
        try:
            start = to_utc(parse_datetime(start_s), self._tz)
            end = to_utc(parse_datetime(end_s), self._tz)
        except (ValueError, OverflowError):
            raise ValidationError(INVALID_DATES_MESSAGE)
        return start, end

    def list_overview(self, *, search: str = "", employee_id: Optional[int] = None) -> TimesheetOverview:
        timesheets = list(self._timesheets.list_with_employees())

        needle = (search or "").strip().lower()
        rows: list[dict] = []
        for t in timesheets:
            if needle not in (t.employee_name or "").lower():
                continue
            if employee_id is not None and t.employee_id != employee_id:
                continue
            rows.append(
                {
                    "id": t.timesheet_id,
                    "employee_id": t.employee_id,
                    "employee_name": t.employee_name or "-",
                    "start_time": self._display(t.start_time),
                    "end_time": self._display(t.end_time),
                    "summary": t.summary,
                }
            )

        # The calendar shows every fetched timesheet; table filters do not apply.
        events = [
            {
                "id": t.timesheet_id,
                "title": t.employee_name or f"Employee #{t.employee_id}",
                "start": self._display(t.start_time),
                "end": self._display(t.end_time),
                "summary": t.summary,
            }
            for t in timesheets
        ]

        seen: dict[int, str] = {}
        for t in timesheets:
            seen.setdefault(t.employee_id, t.employee_name or f"Employee #{t.employee_id}")
        employees = [{"id": k, "full_name": v} for k, v in seen.items()]

        return TimesheetOverview(rows=rows, events=events, employees=employees)

    def create_timesheet(self, *, employee_id: str, start_time: str, end_time: str, summary: str) -> int:
        if any(_is_blank(v) for v in (employee_id, start_time, end_time, summary)):
            raise ValidationError(FIELDS_REQUIRED_MESSAGE)

        try:
            emp_id = int(employee_id.strip())
        except ValueError:
            raise ValidationError(INVALID_EMPLOYEE_MESSAGE)

        start, end = self._parse_pair(start_time, end_time)
        if start >= end:
            raise ValidationError(START_BEFORE_END_MESSAGE)

        if not self._employees.exists(emp_id):
            raise ValidationError(INVALID_EMPLOYEE_MESSAGE)

        total_hours = hours_between(start, end)
        timesheet_id = self._timesheets.create(
            employee_id=emp_id,
            start_time=start,
            end_time=end,
            total_hours=total_hours,
            summary=summary.strip(),
        )
        logger.info("Created timesheet id=%s employee_id=%s hours=%.2f", timesheet_id, emp_id, total_hours)
        return timesheet_id

    def update_timesheet(self, *, timesheet_id: int, start_time: str, end_time: str, summary: str) -> None:
        """Rewrite start, end and summary.

        Ordering is not checked and ``total_hours`` keeps its creation-time
        value; the view page recomputes hours from the stored times.
        """
        if not self._timesheets.get_by_id(int(timesheet_id)):
            raise NotFoundError("Timesheet not found")

        if any(_is_blank(v) for v in (start_time, end_time, summary)):
            raise ValidationError(FIELDS_REQUIRED_MESSAGE)

        start, end = self._parse_pair(start_time, end_time)
        self._timesheets.update(timesheet_id=int(timesheet_id), start_time=start, end_time=end, summary=summary.strip())
        logger.info("Updated timesheet id=%s", timesheet_id)

    def get_view(self, timesheet_id: int) -> TimesheetView:
        t = self._timesheets.get_by_id(int(timesheet_id))
        if not t:
            raise NotFoundError("Timesheet not found")
        return self._to_view(t)

    def _to_view(self, t: Timesheet) -> TimesheetView:
        return TimesheetView(
            timesheet_id=t.timesheet_id,
            employee_id=t.employee_id,
            employee_name=t.employee_name,
            start_time=format_local_input(to_local(t.start_time, self._tz)),
            end_time=format_local_input(to_local(t.end_time, self._tz)),
            total_hours=live_total_hours(t.start_time, t.end_time),
            stored_total_hours=t.total_hours,
            summary=t.summary,
        )
