from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, EmployeeProfile


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note: the service layer depends on this interface, not on a concrete DB.
    """

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def exists(self, employee_id: int) -> bool:
        raise NotImplementedError

    def create(
        self,
        *,
        profile: EmployeeProfile,
        photo: Optional[bytes],
        document: Optional[bytes],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        employee_id: int,
        profile: EmployeeProfile,
        photo: Optional[bytes] = None,
        document: Optional[bytes] = None,
    ) -> None:
        """Replace all scalar fields; an attachment column is written only when a payload is given."""

        raise NotImplementedError
