"""In-memory filtering, sorting and pagination for the employee listing.

The listing loads every employee and narrows the list in Python. Moving
these steps into ``WHERE`` / ``ORDER BY`` / ``LIMIT`` is the upgrade path if
the table grows.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..core.constants import EMPLOYEE_SORT_FIELDS, EMPLOYEES_PAGE_SIZE
from .model import Employee


@dataclass(frozen=True)
class EmployeeListQuery:
    search: str = ""
    position: str = ""
    sort: str = "id"
    order: str = "asc"
    page: int = 1

    @classmethod
    def from_args(
        cls,
        *,
        search: Optional[str] = None,
        position: Optional[str] = None,
        sort: Optional[str] = None,
        order: Optional[str] = None,
        page: Optional[str] = None,
    ) -> "EmployeeListQuery":
        """Build a query from request args, falling back to defaults for bad values."""
        return cls(
            search=(search or "").strip(),
            position=position or "",
            sort=sort if sort in EMPLOYEE_SORT_FIELDS else "id",
            order="desc" if order == "desc" else "asc",
            page=int(page) if page and page.isdecimal() and int(page) > 0 else 1,
        )


def filter_employees(employees: Iterable[Employee], *, search: str = "", position: str = "") -> list[Employee]:
    needle = search.lower()
    return [
        e
        for e in employees
        if needle in (e.full_name or "").lower() and (not position or e.position == position)
    ]


def _sort_key(field: str):
    if field == "id":
        return lambda e: e.employee_id
    return lambda e: getattr(e, field) or ""


def sort_employees(employees: Iterable[Employee], *, field: str = "id", descending: bool = False) -> list[Employee]:
    # sorted() is stable in both directions, so ties keep encounter order.
    return sorted(employees, key=_sort_key(field), reverse=descending)


def paginate(items: Sequence, *, page: int, page_size: int = EMPLOYEES_PAGE_SIZE) -> tuple[list, int, int]:
    """Return ``(page_items, page, total_pages)`` with ``page`` clamped into range."""
    total_pages = math.ceil(len(items) / page_size)
    page = max(1, min(page, total_pages or 1))
    start = (page - 1) * page_size
    return list(items[start : start + page_size]), page, total_pages


def distinct_positions(employees: Iterable[Employee]) -> list[str]:
    seen: dict[str, None] = {}
    for e in employees:
        if e.position:
            seen.setdefault(e.position, None)
    return list(seen)
