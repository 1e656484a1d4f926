from __future__ import annotations

from typing import Optional

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_key_name, fetchone
from .model import Admin
from .repository import AdminRepository

_ADMIN_COLUMNS = """
    admin_id, name, email, phone, organization, username, password,
    security_question, security_answer, created_at, updated_at
"""


def _duplicate_conflict(exc: BaseException, suffix: str) -> Optional[ConflictError]:
    key = duplicate_key_name(exc)
    if key is None:
        return None
    field = "Username" if key == "uq_admins_username" else "Email"
    return ConflictError(f"{field} {suffix}")


def _to_admin(row: dict) -> Admin:
    return Admin(
        admin_id=int(row["admin_id"]),
        name=row["name"],
        email=row["email"],
        phone=row.get("phone"),
        organization=row.get("organization"),
        username=row["username"],
        password_hash=row["password"],
        security_question=row.get("security_question"),
        security_answer_hash=row.get("security_answer"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value) -> Optional[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ADMIN_COLUMNS} FROM admins WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _to_admin(row) if row else None

    def get_by_id(self, admin_id: int) -> Optional[Admin]:
        return self._get_one("admin_id", int(admin_id))

    def get_by_username(self, username: str) -> Optional[Admin]:
        return self._get_one("username", username)

    def get_by_email(self, email: str) -> Optional[Admin]:
        return self._get_one("email", email)

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO admins(name, email, phone, organization, username, password, security_question, security_answer)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (name, email, phone, organization, username, password_hash, security_question, security_answer_hash),
                )
                return int(cur.lastrowid)
        except Exception as e:
            conflict = _duplicate_conflict(e, "already exists")
            if conflict:
                raise conflict from e
            raise

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE admins
                    SET name=%s, email=%s, phone=%s, organization=%s, username=%s
                    WHERE admin_id=%s
                    """,
                    (name, email, phone, organization, username, int(admin_id)),
                )
                return cur.rowcount > 0
        except Exception as e:
            conflict = _duplicate_conflict(e, "already in use")
            if conflict:
                raise conflict from e
            raise

    def update_password(self, admin_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE admins SET password=%s WHERE admin_id=%s", (password_hash, int(admin_id)))
            return cur.rowcount > 0
