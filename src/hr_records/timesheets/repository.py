from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Timesheet


class TimesheetRepository(Protocol):
    def list_with_employees(self) -> Sequence[Timesheet]:
        """All timesheets with ``employee_name`` filled in (single joined query)."""

        raise NotImplementedError

    def get_by_id(self, timesheet_id: int) -> Optional[Timesheet]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        start_time: datetime,
        end_time: datetime,
        total_hours: float,
        summary: str,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        timesheet_id: int,
        start_time: datetime,
        end_time: datetime,
        summary: str,
    ) -> None:
        """Rewrite times and summary only; ``total_hours`` is left as stored."""

        raise NotImplementedError
