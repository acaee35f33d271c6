from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required.")
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def require_non_negative_number(value: Optional[str], field_name: str) -> Decimal:
    try:
        number = Decimal((value or "").strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number.")
    if not number.is_finite():
        raise ValidationError(f"{field_name} must be a number.")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative.")
    return number


def require_date(value: Optional[str], field_name: str) -> date:
    text = require_non_empty(value, field_name)
    try:
        return parse_iso_date(text)
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid date.")


def optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    if value is None or not value.strip():
        return None
    return require_date(value, field_name)
