from __future__ import annotations

import pytest
from mysql.connector import errors as mysql_errors

from src.attendance_tracker.attendance_tracker.database import connection
from src.attendance_tracker.attendance_tracker.database.connection import DatabaseConnection, DBConfig


class _ScriptedPool:
    """Hands out results in order; exceptions are raised like an exhausted pool would."""

    def __init__(self, *results):
        self._results = list(results)
        self.calls = 0

    def get_connection(self):
        self.calls += 1
        result = self._results.pop(0) if self._results else mysql_errors.PoolError(
            msg="Failed getting connection; pool exhausted"
        )
        if isinstance(result, Exception):
            raise result
        return result


def _db(pool, *, pool_timeout: float) -> DatabaseConnection:
    db = DatabaseConnection(
        DBConfig(
            host="db",
            port=3306,
            user="app",
            password="pw",
            database="attendance",
            pool_size=2,
            pool_timeout=pool_timeout,
        )
    )
    db._pool = pool
    return db


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr(connection.time, "sleep", calls.append)
    return calls


def test_connect_waits_for_a_released_connection(sleeps):
    exhausted = mysql_errors.PoolError(msg="Failed getting connection; pool exhausted")
    pool = _ScriptedPool(exhausted, exhausted, "pooled")

    assert _db(pool, pool_timeout=5.0).connect() == "pooled"
    assert pool.calls == 3
    assert len(sleeps) == 2


def test_connect_falls_back_to_standalone_connection_when_pool_stays_full(monkeypatch, sleeps):
    opened = []
    monkeypatch.setattr(connection.mysql.connector, "connect", lambda **kw: opened.append(kw) or "standalone")
    pool = _ScriptedPool()

    assert _db(pool, pool_timeout=0).connect() == "standalone"
    assert pool.calls == 1
    assert sleeps == []
    assert opened[0]["host"] == "db"
    assert opened[0]["database"] == "attendance"
    assert opened[0]["time_zone"] == "+03:00"
    assert opened[0]["client_flags"]
