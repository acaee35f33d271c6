from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_blob
from .model import Employee, EmployeeProfile
from .repository import EmployeeRepository

_SCALAR_COLUMNS = (
    "id, full_name, email, phone, position, department, salary, hire_date, date_of_birth, address"
)


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["id"]),
        full_name=r["full_name"],
        email=r["email"],
        phone=r.get("phone"),
        position=r["position"],
        department=r["department"],
        salary=Decimal(str(r["salary"])) if r.get("salary") is not None else Decimal("0"),
        hire_date=r.get("hire_date"),
        date_of_birth=r.get("date_of_birth"),
        address=r.get("address"),
        photo=normalize_blob(r.get("photo")),
        document=normalize_blob(r.get("document")),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SCALAR_COLUMNS} FROM employees ORDER BY id ASC")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SCALAR_COLUMNS}, photo, document
                FROM employees
                WHERE id=%s
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return _row_to_employee(row)

    def exists(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM employees WHERE id=%s", (int(employee_id),))
            return fetchone(cur) is not None

    def create(
        self,
        *,
        profile: EmployeeProfile,
        photo: Optional[bytes],
        document: Optional[bytes],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(full_name, email, phone, position, department, salary,
                                      hire_date, date_of_birth, address, photo, document)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    profile.full_name,
                    profile.email,
                    profile.phone,
                    profile.position,
                    profile.department,
                    profile.salary,
                    profile.hire_date,
                    profile.date_of_birth,
                    profile.address,
                    photo,
                    document,
                ),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        employee_id: int,
        profile: EmployeeProfile,
        photo: Optional[bytes] = None,
        document: Optional[bytes] = None,
    ) -> None:
        assignments = [
            "full_name=%s",
            "email=%s",
            "phone=%s",
            "position=%s",
            "department=%s",
            "salary=%s",
            "hire_date=%s",
            "date_of_birth=%s",
            "address=%s",
        ]
        params: list[object] = [
            profile.full_name,
            profile.email,
            profile.phone,
            profile.position,
            profile.department,
            profile.salary,
            profile.hire_date,
            profile.date_of_birth,
            profile.address,
        ]

        # Attachments are only overwritten when a new file was uploaded.
        if photo is not None:
            assignments.append("photo=%s")
            params.append(photo)
        if document is not None:
            assignments.append("document=%s")
            params.append(document)

        params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employees SET {', '.join(assignments)} WHERE id=%s",
                tuple(params),
            )
