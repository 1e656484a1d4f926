from __future__ import annotations

from typing import Optional, Protocol

from .model import Admin


class AdminRepository(Protocol):
    """Repository interface for Admin.

    Note (DIP): the service layer depends on this interface, not on a concrete database.
    """

    def get_by_id(self, admin_id: int) -> Optional[Admin]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Admin]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Admin]:
        raise NotImplementedError

    def create_admin(
        self,
        *,
        name: str,
        email: str,
        phone: Optional[str],
        organization: Optional[str],
        username: str,
        password_hash: str,
        security_question: str,
        security_answer_hash: str,
    ) -> int:
        raise NotImplementedError

    def update_profile(
        self,
        admin_id: int,
        *,
        name: str,
        email: str,
        phone: Optional[str],
        organization: Optional[str],
        username: str,
    ) -> bool:
        raise NotImplementedError

    def update_password(self, admin_id: int, password_hash: str) -> bool:
        raise NotImplementedError
