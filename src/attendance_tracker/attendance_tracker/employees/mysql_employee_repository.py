from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, like_pattern
from .model import Employee
from .repository import EmployeeRepository

_EMPLOYEE_COLUMNS = """
    employee_id, admin_id, name, email, phone, position, department, qr_code, created_at, updated_at
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        admin_id=int(row["admin_id"]),
        name=row["name"],
        email=row["email"],
        phone=row.get("phone"),
        position=row.get("position"),
        department=row.get("department"),
        qr_code=row.get("qr_code"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_for_admin(self, employee_id: int, admin_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE employee_id=%s AND admin_id=%s",
                (int(employee_id), int(admin_id)),
            )
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_for_admin(self, admin_id: int) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE admin_id=%s ORDER BY name",
                (int(admin_id),),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def email_exists(self, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM employees WHERE email=%s LIMIT 1", (email,))
            return fetchone(cur) is not None

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(admin_id, name, email, phone, position, department, qr_code)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(admin_id), name, email, phone, position, department, qr_code),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Email already exists") from e
            raise

    def update_qr_code(self, employee_id: int, qr_code: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET qr_code=%s WHERE employee_id=%s", (qr_code, int(employee_id)))
            return cur.rowcount > 0

    def search_for_admin(self, admin_id: int, term: str, *, limit: int) -> Sequence[Employee]:
        pattern = like_pattern(term)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EMPLOYEE_COLUMNS}
                FROM employees
                WHERE admin_id=%s
                  AND (name LIKE %s OR email LIKE %s OR CAST(employee_id AS CHAR) LIKE %s OR phone LIKE %s)
                ORDER BY
                  CASE
                    WHEN name LIKE %s THEN 1
                    WHEN email LIKE %s THEN 2
                    WHEN CAST(employee_id AS CHAR) LIKE %s THEN 3
                    ELSE 4
                  END,
                  name
                LIMIT %s
                """,
                (int(admin_id), pattern, pattern, pattern, pattern, pattern, pattern, pattern, int(limit)),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def find_similar(self, term: str, *, limit: int) -> Sequence[Employee]:
        pattern = like_pattern(term)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EMPLOYEE_COLUMNS}
                FROM employees
                WHERE CAST(employee_id AS CHAR) LIKE %s OR name LIKE %s OR email LIKE %s
                LIMIT %s
                """,
                (pattern, pattern, pattern, int(limit)),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def delete_for_admin(self, employee_id: int, admin_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM employees WHERE employee_id=%s AND admin_id=%s",
                (int(employee_id), int(admin_id)),
            )
            return cur.rowcount > 0
