from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from hr_records.core.exceptions import NotFoundError, ValidationError
from hr_records.timesheets.service import (
    FIELDS_REQUIRED_MESSAGE,
    INVALID_DATES_MESSAGE,
    INVALID_EMPLOYEE_MESSAGE,
    START_BEFORE_END_MESSAGE,
    TimesheetService,
    live_total_hours,
)


@pytest.fixture
def svc(timesheets_repo, employees_repo) -> TimesheetService:
    return TimesheetService(timesheets_repo, employees_repo, tz=timezone.utc)


def test_create_stores_hours_between_start_and_end(svc, timesheets_repo):
    new_id = svc.create_timesheet(
        employee_id="4",
        start_time="2024-02-01T09:00",
        end_time="2024-02-01T17:00",
        summary="  Design review  ",
    )

    saved = timesheets_repo.get_by_id(new_id)
    assert saved.total_hours == 8.0
    assert saved.summary == "Design review"
    assert saved.employee_name == "Hannah Berg"


@pytest.mark.parametrize(
    "employee_id, start, end, summary, message",
    [
        ("1", "2024-02-01T09:00", "2024-02-01T17:00", " ", FIELDS_REQUIRED_MESSAGE),
        ("", "2024-02-01T09:00", "2024-02-01T17:00", "Work", FIELDS_REQUIRED_MESSAGE),
        ("abc", "2024-02-01T09:00", "2024-02-01T17:00", "Work", INVALID_EMPLOYEE_MESSAGE),
        ("1", "yesterday", "2024-02-01T17:00", "Work", INVALID_DATES_MESSAGE),
        ("1", "2024-02-01T17:00", "2024-02-01T09:00", "Work", START_BEFORE_END_MESSAGE),
        ("1", "2024-02-01T09:00", "2024-02-01T09:00", "Work", START_BEFORE_END_MESSAGE),
        ("999", "2024-02-01T09:00", "2024-02-01T17:00", "Work", INVALID_EMPLOYEE_MESSAGE),
    ],
)
def test_create_rejects_invalid_input(svc, timesheets_repo, employee_id, start, end, summary, message):
    before = len(timesheets_repo.list_with_employees())

    with pytest.raises(ValidationError) as exc:
        svc.create_timesheet(employee_id=employee_id, start_time=start, end_time=end, summary=summary)

    assert str(exc.value) == message
    assert len(timesheets_repo.list_with_employees()) == before


def test_create_converts_local_input_to_utc(timesheets_repo, employees_repo):
    plus_two = timezone(timedelta(hours=2))
    svc = TimesheetService(timesheets_repo, employees_repo, tz=plus_two)

    new_id = svc.create_timesheet(
        employee_id="1",
        start_time="2024-06-01T09:00",
        end_time="2024-06-01T17:30",
        summary="Shift",
    )

    saved = timesheets_repo.get_by_id(new_id)
    assert saved.start_time == datetime(2024, 6, 1, 7, 0)
    assert saved.end_time == datetime(2024, 6, 1, 15, 30)

    view = svc.get_view(new_id)
    assert view.start_time == "2024-06-01T09:00"
    assert view.end_time == "2024-06-01T17:30"


def test_edit_keeps_stored_hours_while_view_recomputes(svc, timesheets_repo):
    svc.update_timesheet(timesheet_id=1, start_time="2024-01-01T09:00", end_time="2024-01-01T12:00", summary="Shorter day")

    assert timesheets_repo.get_by_id(1).total_hours == 8.0
    view = svc.get_view(1)
    assert view.stored_total_hours == 8.0
    assert view.total_hours == 3.0
    assert view.summary == "Shorter day"


def test_edit_allows_end_before_start_and_view_shows_zero(svc):
    svc.update_timesheet(timesheet_id=2, start_time="2024-01-02T16:00", end_time="2024-01-02T08:30", summary="Swapped")

    view = svc.get_view(2)
    assert view.total_hours == 0.0
    assert view.stored_total_hours == 7.5


def test_edit_still_requires_parseable_values(svc):
    with pytest.raises(ValidationError) as exc:
        svc.update_timesheet(timesheet_id=1, start_time="", end_time="2024-01-01T12:00", summary="x")
    assert str(exc.value) == FIELDS_REQUIRED_MESSAGE

    with pytest.raises(ValidationError) as exc:
        svc.update_timesheet(timesheet_id=1, start_time="soon", end_time="2024-01-01T12:00", summary="x")
    assert str(exc.value) == INVALID_DATES_MESSAGE


def test_edit_unknown_timesheet_raises_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.update_timesheet(timesheet_id=42, start_time="2024-01-01T09:00", end_time="2024-01-01T12:00", summary="x")


def test_view_rounds_hours_to_two_decimals():
    assert live_total_hours(datetime(2024, 1, 1, 9, 0), datetime(2024, 1, 1, 9, 20)) == 0.33
    assert live_total_hours(datetime(2024, 1, 1, 10, 0), datetime(2024, 1, 1, 14, 45)) == 4.75


def test_calendar_ignores_table_filters(svc):
    overview = svc.list_overview(search="schmidt")

    assert [r["id"] for r in overview.rows] == [1]
    assert [e["id"] for e in overview.events] == [1, 2, 3]


def test_table_filters_by_employee(svc):
    overview = svc.list_overview(employee_id=2)

    assert [r["employee_name"] for r in overview.rows] == ["John Carter"]
    assert overview.rows[0]["start_time"] == "2024-01-02 08:30"
    assert {e["id"] for e in overview.employees} == {1, 2, 3}


def test_view_missing_timesheet_raises_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.get_view(99)


def test_create_rejects_times_outside_the_datetime_range(timesheets_repo, employees_repo):
    svc = TimesheetService(timesheets_repo, employees_repo, tz=timezone(timedelta(hours=2)))

    with pytest.raises(ValidationError) as exc:
        svc.create_timesheet(employee_id="1", start_time="0001-01-01T00:30", end_time="0001-01-01T05:00", summary="Work")

    assert str(exc.value) == INVALID_DATES_MESSAGE


def test_edit_rejects_times_outside_the_datetime_range(timesheets_repo, employees_repo):
    svc = TimesheetService(timesheets_repo, employees_repo, tz=timezone(timedelta(hours=-2)))

    with pytest.raises(ValidationError) as exc:
        svc.update_timesheet(timesheet_id=1, start_time="2024-01-01T09:00", end_time="9999-12-31T23:30", summary="Work")

    assert str(exc.value) == INVALID_DATES_MESSAGE
