from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note: every `*_for_admin` method filters by owner id in the query itself
    (tenant isolation), so a foreign employee looks exactly like a missing one.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_for_admin(self, employee_id: int, admin_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_for_admin(self, admin_id: int) -> Sequence[Employee]:
        raise NotImplementedError

    def email_exists(self, email: str) -> bool:
        raise NotImplementedError

    def create_employee(
        self,
        *,
        admin_id: int,
        name: str,
        email: str,
        phone: str,
        position: Optional[str],
        department: Optional[str],
        qr_code: str,
    ) -> int:
        raise NotImplementedError

    def update_qr_code(self, employee_id: int, qr_code: str) -> bool:
        raise NotImplementedError

    def search_for_admin(self, admin_id: int, term: str, *, limit: int) -> Sequence[Employee]:
        raise NotImplementedError

    def find_similar(self, term: str, *, limit: int) -> Sequence[Employee]:
        """Fuzzy lookup across id/name/email of all employees (used for 'did you mean')."""
        raise NotImplementedError

    def delete_for_admin(self, employee_id: int, admin_id: int) -> bool:
        raise NotImplementedError
