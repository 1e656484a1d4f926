from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_str, require_fields, require_min_length
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import Admin
from .repository import AdminRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Use cases: admin signup, signin, profile and password management."""

    def __init__(self, admins: AdminRepository):
        self._admins = admins

    def signup(
        self,
        *,
        name: str,
        email: str,
        phone: Optional[str],
        organization: Optional[str],
        username: str,
        password: str,
        security_question: str,
        security_answer: str,
    ) -> int:
        require_fields(
            {
                "name": name,
                "email": email,
                "username": username,
                "password": password,
                "security_question": security_question,
                "security_answer": security_answer,
            },
            ("name", "email", "username", "password", "security_question", "security_answer"),
            "All fields are required",
        )
        username = username.strip()
        email = email.strip()

        if self._admins.get_by_username(username):
            raise ConflictError("Username already exists")
        if self._admins.get_by_email(email):
            raise ConflictError("Email already exists")

        # Password and security answer get independent salts.
        admin_id = self._admins.create_admin(
            name=name.strip(),
            email=email,
            phone=optional_str(phone),
            organization=optional_str(organization),
            username=username,
            password_hash=generate_password_hash(password),
            security_question=security_question.strip(),
            security_answer_hash=generate_password_hash(security_answer),
        )
        logger.info("Admin registered: %s (id=%s)", username, admin_id)
        return admin_id

    def authenticate(self, username: str, password: str) -> Admin:
        admin = self._admins.get_by_username((username or "").strip()) if username else None
        if not admin:
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(admin.password_hash, password or "")
        except Exception:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError(INVALID_CREDENTIALS)
        return admin

    def get_profile(self, admin_id: int) -> dict:
        admin = self._admins.get_by_id(admin_id)
        if not admin:
            raise NotFoundError("Admin not found")
        return admin.to_profile()

    def update_profile(
        self,
        admin_id: int,
        *,
        name: str,
        email: str,
        phone: Optional[str],
        organization: Optional[str],
        username: str,
    ) -> None:
        require_fields(
            {"name": name, "email": email, "username": username},
            ("name", "email", "username"),
            "Name, email and username are required",
        )
        email = email.strip()
        username = username.strip()

        other = self._admins.get_by_email(email)
        if other and other.admin_id != admin_id:
            raise ConflictError("Email already in use")
        other = self._admins.get_by_username(username)
        if other and other.admin_id != admin_id:
            raise ConflictError("Username already in use")

        self._admins.update_profile(
            admin_id,
            name=name.strip(),
            email=email,
            phone=optional_str(phone),
            organization=optional_str(organization),
            username=username,
        )

    def change_password(self, admin_id: int, *, current_password: str, new_password: str) -> None:
        if not current_password or not new_password:
            raise ValidationError("Current and new password are required")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        admin = self._admins.get_by_id(admin_id)
        if not admin:
            raise NotFoundError("Admin not found")
        if not check_password_hash(admin.password_hash, current_password):
            raise AuthenticationError("Current password is incorrect")

        self._admins.update_password(admin_id, generate_password_hash(new_password))
        logger.info("Password changed for admin id=%s", admin_id)
