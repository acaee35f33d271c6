from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.attachments import ensure_image, photo_mime, sniff_document, to_data_uri
from ..common.datetime_utils import age_on, today_local
from ..common.validators import (
    optional_date,
    optional_text,
    require_date,
    require_non_empty,
    require_non_negative_number,
)
from ..core.constants import EMPLOYEES_PAGE_SIZE, MINIMUM_EMPLOYEE_AGE
from ..core.exceptions import NotFoundError, ValidationError
from .listing import EmployeeListQuery, distinct_positions, filter_employees, paginate, sort_employees
from .model import Employee, EmployeeInput, EmployeeProfile
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

AGE_MESSAGE = f"Employee must be at least {MINIMUM_EMPLOYEE_AGE} years old."


@dataclass(frozen=True)
class EmployeePage:
    items: list[Employee]
    page: int
    total_pages: int
    total: int
    positions: list[str]
    query: EmployeeListQuery


@dataclass(frozen=True)
class EmployeeView:
    """Display model: attachments encoded as data URIs, stored bytes untouched."""

    employee: Employee
    photo_uri: Optional[str]
    document_uri: Optional[str]
    document_name: Optional[str]


@dataclass(frozen=True)
class EmployeeDocument:
    data: bytes
    mimetype: str
    filename: str


def is_adult(date_of_birth: date, today: date) -> bool:
    return age_on(date_of_birth, today) >= MINIMUM_EMPLOYEE_AGE


def build_view(employee: Employee) -> EmployeeView:
    photo_uri = to_data_uri(employee.photo, photo_mime(employee.photo)) if employee.photo else None

    document_uri = None
    document_name = None
    if employee.document:
        mime, ext = sniff_document(employee.document)
        document_uri = to_data_uri(employee.document, mime)
        document_name = f"Employee_{employee.employee_id}.{ext}"

    return EmployeeView(
        employee=employee,
        photo_uri=photo_uri,
        document_uri=document_uri,
        document_name=document_name,
    )


class EmployeeService:
    """Use cases: list, view and save employee profiles."""

    def __init__(self, employees: EmployeeRepository, *, page_size: int = EMPLOYEES_PAGE_SIZE):
        self._employees = employees
        self._page_size = int(page_size)

    def list_page(self, query: EmployeeListQuery) -> EmployeePage:
        employees = list(self._employees.list_all())

        filtered = filter_employees(employees, search=query.search, position=query.position)
        ordered = sort_employees(filtered, field=query.sort, descending=query.order == "desc")
        items, page, total_pages = paginate(ordered, page=query.page, page_size=self._page_size)

        return EmployeePage(
            items=items,
            page=page,
            total_pages=total_pages,
            total=len(ordered),
            positions=distinct_positions(employees),
            query=query,
        )

    def list_options(self) -> list[dict]:
        return [{"id": e.employee_id, "full_name": e.full_name} for e in self._employees.list_all()]

    def _get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def get_view(self, employee_id: int) -> EmployeeView:
        return build_view(self._get(employee_id))

    def get_document(self, employee_id: int) -> EmployeeDocument:
        employee = self._get(employee_id)
        if not employee.document:
            raise NotFoundError("Employee has no document")
        mime, ext = sniff_document(employee.document)
        return EmployeeDocument(
            data=employee.document,
            mimetype=mime,
            filename=f"Employee_{employee.employee_id}.{ext}",
        )

    def save_employee(self, data: EmployeeInput, *, today: Optional[date] = None) -> int:
        """Insert when ``data.employee_id`` is empty, otherwise update that row.

        Insert: a missing photo/document is stored as NULL, and the age rule
        applies. Update: a missing photo/document keeps the stored value, and
        the age rule is not re-checked.
        """
        is_create = data.employee_id is None
        profile = self._validate_profile(data)

        if is_create and profile.date_of_birth is not None:
            if not is_adult(profile.date_of_birth, today or today_local()):
                raise ValidationError(AGE_MESSAGE)

        if data.photo:
            ensure_image(data.photo)

        photo = data.photo or None
        document = data.document or None

        if is_create:
            employee_id = self._employees.create(profile=profile, photo=photo, document=document)
            logger.info("Created employee id=%s", employee_id)
            return employee_id

        if not self._employees.exists(data.employee_id):
            raise NotFoundError("Employee not found")

        self._employees.update(employee_id=data.employee_id, profile=profile, photo=photo, document=document)
        logger.info(
            "Updated employee id=%s (photo replaced=%s, document replaced=%s)",
            data.employee_id,
            photo is not None,
            document is not None,
        )
        return int(data.employee_id)

    def _validate_profile(self, data: EmployeeInput) -> EmployeeProfile:
        return EmployeeProfile(
            full_name=require_non_empty(data.full_name, "Full name"),
            email=require_non_empty(data.email, "Email"),
            phone=optional_text(data.phone),
            position=require_non_empty(data.position, "Position"),
            department=require_non_empty(data.department, "Department"),
            salary=require_non_negative_number(data.salary, "Salary"),
            hire_date=require_date(data.hire_date, "Hire date"),
            date_of_birth=optional_date(data.date_of_birth, "Date of birth"),
            address=optional_text(data.address),
        )
