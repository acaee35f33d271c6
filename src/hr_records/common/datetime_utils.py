from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import LOCAL_INPUT_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_datetime(value: str) -> datetime:
    """Parse a datetime-local form value (``YYYY-MM-DDTHH:MM[:SS]``).

    A space separator and a trailing UTC offset are accepted as well.
    """
    return datetime.fromisoformat(value.strip())


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """``None`` stands for the server's local zone."""
    if not name:
        return None
    return ZoneInfo(name)


def to_utc(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Naive wall-clock time in ``tz`` -> naive UTC (how the store keeps it)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz) if tz is not None else value.astimezone()
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_local(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Naive UTC from the store -> naive wall-clock time in ``tz``."""
    return value.replace(tzinfo=timezone.utc).astimezone(tz).replace(tzinfo=None)


def format_local_input(value: datetime) -> str:
    return value.strftime(LOCAL_INPUT_FORMAT)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def age_on(birth_date: date, today: date) -> int:
    """Completed years between ``birth_date`` and ``today``."""
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years
