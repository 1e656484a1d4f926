from __future__ import annotations

import pytest
from mysql.connector import errorcode
from mysql.connector import errors as mysql_errors

from src.attendance_tracker.attendance_tracker.admins.mysql_admin_repository import MySQLAdminRepository
from src.attendance_tracker.attendance_tracker.core.exceptions import ConflictError
from src.attendance_tracker.attendance_tracker.database.mysql_base import duplicate_key_name
from src.attendance_tracker.attendance_tracker.employees.mysql_employee_repository import (
    MySQLEmployeeRepository,
)


def _dup(key: str) -> mysql_errors.IntegrityError:
    return mysql_errors.IntegrityError(
        msg=f"Duplicate entry 'x' for key '{key}'",
        errno=errorcode.ER_DUP_ENTRY,
    )


class _FailingCursor:
    def __init__(self, exc: Exception):
        self._exc = exc

    def execute(self, sql, params=None):
        raise self._exc

    def close(self):
        pass


class _Conn:
    def __init__(self, exc: Exception):
        self._exc = exc
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return _FailingCursor(self._exc)

    def commit(self):
        raise AssertionError("commit after a failed write")

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class _ConnFactory:
    """Stands in for DatabaseConnection; every statement raises `exc`."""

    def __init__(self, exc: Exception):
        self.conn = _Conn(exc)

    def connect(self):
        return self.conn


_ADMIN_FIELDS = dict(
    name="Alice",
    email="alice@example.com",
    phone=None,
    organization=None,
    username="alice",
    password_hash="h",
    security_question="q",
    security_answer_hash="a",
)


@pytest.mark.parametrize(
    "key, expected",
    [
        ("employees.uq_employees_email", "uq_employees_email"),
        ("uq_admins_username", "uq_admins_username"),
    ],
)
def test_duplicate_key_name_strips_table_prefix(key, expected):
    assert duplicate_key_name(_dup(key)) == expected


def test_duplicate_key_name_ignores_other_errors():
    fk = mysql_errors.IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2)
    assert duplicate_key_name(fk) is None
    assert duplicate_key_name(ValueError("x")) is None


def test_employee_insert_losing_email_race_is_conflict():
    factory = _ConnFactory(_dup("employees.uq_employees_email"))
    repo = MySQLEmployeeRepository(factory)

    with pytest.raises(ConflictError) as exc:
        repo.create_employee(
            admin_id=1,
            name="Bob",
            email="bob@example.com",
            phone="555",
            position=None,
            department=None,
            qr_code="{}",
        )

    assert exc.value.message == "Email already exists"
    assert factory.conn.rolled_back and factory.conn.closed


@pytest.mark.parametrize(
    "key, message",
    [
        ("admins.uq_admins_username", "Username already exists"),
        ("admins.uq_admins_email", "Email already exists"),
    ],
)
def test_admin_insert_losing_race_names_the_field(key, message):
    repo = MySQLAdminRepository(_ConnFactory(_dup(key)))

    with pytest.raises(ConflictError) as exc:
        repo.create_admin(**_ADMIN_FIELDS)

    assert exc.value.message == message


def test_admin_profile_update_losing_race_is_conflict():
    repo = MySQLAdminRepository(_ConnFactory(_dup("admins.uq_admins_username")))

    with pytest.raises(ConflictError) as exc:
        repo.update_profile(
            1,
            name="Alice",
            email="alice@example.com",
            phone=None,
            organization=None,
            username="bob",
        )

    assert exc.value.message == "Username already in use"


def test_other_integrity_errors_propagate():
    fk = mysql_errors.IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2)
    repo = MySQLAdminRepository(_ConnFactory(fk))

    with pytest.raises(mysql_errors.IntegrityError):
        repo.create_admin(**_ADMIN_FIELDS)
