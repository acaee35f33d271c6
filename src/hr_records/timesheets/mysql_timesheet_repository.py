from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Timesheet
from .repository import TimesheetRepository

_SELECT_JOINED = """
    SELECT t.id, t.employee_id, t.start_time, t.end_time, t.total_hours, t.summary,
           e.full_name
    FROM timesheets t
    JOIN employees e ON e.id = t.employee_id
"""


def _row_to_timesheet(r: dict) -> Timesheet:
    return Timesheet(
        timesheet_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        start_time=r["start_time"],
        end_time=r["end_time"],
        total_hours=float(r.get("total_hours") or 0),
        summary=r.get("summary") or "",
        employee_name=r.get("full_name"),
    )


class MySQLTimesheetRepository(TimesheetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_with_employees(self) -> Sequence[Timesheet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_JOINED} ORDER BY t.id ASC")
            return [_row_to_timesheet(r) for r in fetchall(cur)]

    def get_by_id(self, timesheet_id: int) -> Optional[Timesheet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_JOINED} WHERE t.id=%s", (int(timesheet_id),))
            row = fetchone(cur)
            if not row:
                return None
            return _row_to_timesheet(row)

    def create(
        self,
        *,
        employee_id: int,
        start_time: datetime,
        end_time: datetime,
        total_hours: float,
        summary: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timesheets(employee_id, start_time, end_time, total_hours, summary)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), start_time, end_time, float(total_hours), summary),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        timesheet_id: int,
        start_time: datetime,
        end_time: datetime,
        summary: str,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE timesheets
                SET start_time=%s, end_time=%s, summary=%s
                WHERE id=%s
                """,
                (start_time, end_time, summary, int(timesheet_id)),
            )
