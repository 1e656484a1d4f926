from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector import errors as mysql_errors

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, rollback on error, always release."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def is_duplicate_key(exc: BaseException) -> bool:
    return isinstance(exc, mysql_errors.IntegrityError) and getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


def duplicate_key_name(exc: BaseException) -> Optional[str]:
    """Unique key hit by a duplicate-entry error (e.g. `uq_admins_email`), or None for other errors."""
    if not is_duplicate_key(exc):
        return None
    match = re.search(r"for key '([^']+)'", str(getattr(exc, "msg", None) or exc))
    # MySQL 8 prefixes the key with its table name.
    return match.group(1).rsplit(".", 1)[-1] if match else ""


def like_pattern(term: str) -> str:
    return f"%{term}%"


def as_int(value: Any) -> int:
    """SUM() over an empty set comes back as NULL / Decimal."""
    return int(value or 0)
