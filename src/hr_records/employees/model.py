from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object (no DB access code). ``photo``/``document`` are
    only loaded by single-row reads; listings leave them as ``None``.
    """

    employee_id: int
    full_name: str
    email: str
    phone: Optional[str]
    position: str
    department: str
    salary: Decimal
    hire_date: Optional[date]
    date_of_birth: Optional[date]
    address: Optional[str]
    photo: Optional[bytes] = None
    document: Optional[bytes] = None


@dataclass(frozen=True)
class EmployeeProfile:
    """Validated scalar attributes written by both insert and update."""

    full_name: str
    email: str
    phone: Optional[str]
    position: str
    department: str
    salary: Decimal
    hire_date: date
    date_of_birth: Optional[date]
    address: Optional[str]


@dataclass(frozen=True)
class EmployeeInput:
    """Raw form submission for the create/edit write path.

    ``photo``/``document`` are ``None`` when no file was uploaded for the slot.
    """

    full_name: str = ""
    email: str = ""
    phone: str = ""
    position: str = ""
    department: str = ""
    salary: str = ""
    hire_date: str = ""
    date_of_birth: str = ""
    address: str = ""
    employee_id: Optional[int] = None
    photo: Optional[bytes] = None
    document: Optional[bytes] = None
