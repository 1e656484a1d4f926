from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import errors as mysql_errors
from mysql.connector import pooling
from mysql.connector.constants import ClientFlag

logger = logging.getLogger(__name__)

POOL_RETRY_INTERVAL = 0.05


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5
    pool_timeout: float = 5.0
    time_zone: str = "+03:00"


class DatabaseConnection:
    """Singleton-like DB connection factory backed by a mysql-connector pool.

    Note: `connect()` hands out a pooled connection; closing it returns it to the pool.
    The pool is created lazily so the app can start before MySQL is reachable.
    When every pooled connection stays busy for `pool_timeout` seconds, a standalone
    connection is opened instead; closing that one closes it for real.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def _connect_args(self) -> dict:
        return {
            "host": self._config.host,
            "port": int(self._config.port),
            "user": self._config.user,
            "password": self._config.password,
            "database": self._config.database,
            # Session time zone follows the attendance clock so CURRENT_TIMESTAMP and CURDATE() are local.
            "time_zone": self._config.time_zone,
            # rowcount reports matched rows, so no-op UPDATEs still count as found.
            "client_flags": [ClientFlag.FOUND_ROWS],
        }

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        if self._pool is None:
            logger.info(
                "Creating MySQL pool %s@%s:%s/%s (size=%s)",
                self._config.user,
                self._config.host,
                self._config.port,
                self._config.database,
                self._config.pool_size,
            )
            self._pool = pooling.MySQLConnectionPool(
                pool_name="attendance_tracker",
                pool_size=int(self._config.pool_size),
                **self._connect_args(),
            )
        return self._pool

    def connect(self):
        pool = self._get_pool()
        deadline = time.monotonic() + float(self._config.pool_timeout)
        while True:
            try:
                return pool.get_connection()
            except mysql_errors.PoolError:
                if time.monotonic() >= deadline:
                    break
                time.sleep(POOL_RETRY_INTERVAL)

        logger.warning(
            "MySQL pool exhausted for %.1fs (size=%s); opening a standalone connection",
            float(self._config.pool_timeout),
            self._config.pool_size,
        )
        return mysql.connector.connect(**self._connect_args())
