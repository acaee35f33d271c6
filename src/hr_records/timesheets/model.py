from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Timesheet:
    """Domain entity: one logged block of work.

    ``start_time``/``end_time`` are naive UTC. ``total_hours`` is the value
    stored at creation and is not refreshed when the times are edited.
    """

    timesheet_id: int
    employee_id: int
    start_time: datetime
    end_time: datetime
    total_hours: float
    summary: str
    employee_name: Optional[str] = None
