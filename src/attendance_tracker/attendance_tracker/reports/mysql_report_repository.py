from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_int, db_cursor, fetchall
from .model import EmployeeReportRow
from .repository import ReportRepository


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def employee_counts(self, admin_id: int, *, start: date, end: date) -> Sequence[EmployeeReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT e.employee_id, e.name, e.email, e.department,
                       SUM(CASE WHEN a.status = 'Present' THEN 1 ELSE 0 END) AS present,
                       SUM(CASE WHEN a.status = 'Late' THEN 1 ELSE 0 END) AS late,
                       SUM(CASE WHEN a.status = 'Absent' THEN 1 ELSE 0 END) AS absent
                FROM employees e
                LEFT JOIN attendance a
                    ON a.employee_id = e.employee_id AND a.work_date BETWEEN %s AND %s
                WHERE e.admin_id=%s
                GROUP BY e.employee_id, e.name, e.email, e.department
                ORDER BY e.name
                """,
                (start, end, int(admin_id)),
            )
            return [
                EmployeeReportRow(
                    employee_id=int(r["employee_id"]),
                    name=r["name"],
                    email=r["email"],
                    department=r.get("department"),
                    present=as_int(r.get("present")),
                    late=as_int(r.get("late")),
                    absent=as_int(r.get("absent")),
                )
                for r in fetchall(cur)
            ]
