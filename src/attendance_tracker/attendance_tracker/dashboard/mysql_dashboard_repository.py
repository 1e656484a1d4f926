from __future__ import annotations

from datetime import date, datetime
from typing import Sequence

from ..core.enums import ActivityType, AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_int, db_cursor, fetchall, fetchone, like_pattern
from ..employees.model import Employee
from .model import ActivityItem, DailyStatusCount, EmployeeStatusRow
from .repository import DashboardRepository


class MySQLDashboardRepository(DashboardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def count_employees(self, admin_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM employees WHERE admin_id=%s", (int(admin_id),))
            return as_int((fetchone(cur) or {}).get("total"))

    def count_employees_created_on(self, admin_id: int, day: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM employees WHERE admin_id=%s AND DATE(created_at)=%s",
                (int(admin_id), day),
            )
            return as_int((fetchone(cur) or {}).get("total"))

    def status_counts_on(self, admin_id: int, day: date) -> dict[AttendanceStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.status, COUNT(*) AS total
                FROM attendance a
                JOIN employees e ON e.employee_id = a.employee_id
                WHERE e.admin_id=%s AND a.work_date=%s
                GROUP BY a.status
                """,
                (int(admin_id), day),
            )
            counts = {s: 0 for s in AttendanceStatus}
            for r in fetchall(cur):
                counts[AttendanceStatus(r["status"])] = as_int(r["total"])
            return counts

    def employee_status_on(self, admin_id: int, day: date) -> Sequence[EmployeeStatusRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT e.employee_id, e.name, e.email, e.phone, e.department, e.position,
                       a.status, a.timestamp, a.attendance_id
                FROM employees e
                LEFT JOIN attendance a ON a.employee_id = e.employee_id AND a.work_date=%s
                WHERE e.admin_id=%s
                ORDER BY e.name
                """,
                (day, int(admin_id)),
            )
            return [
                EmployeeStatusRow(
                    employee_id=int(r["employee_id"]),
                    name=r["name"],
                    email=r["email"],
                    phone=r.get("phone"),
                    department=r.get("department"),
                    position=r.get("position"),
                    status=AttendanceStatus(r["status"]) if r.get("status") else None,
                    timestamp=r.get("timestamp"),
                    attendance_id=int(r["attendance_id"]) if r.get("attendance_id") else None,
                )
                for r in fetchall(cur)
            ]

    def recent_attendance(self, admin_id: int, *, since: datetime, limit: int) -> Sequence[ActivityItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT e.employee_id, e.name, a.status, a.timestamp
                FROM attendance a
                JOIN employees e ON e.employee_id = a.employee_id
                WHERE e.admin_id=%s AND a.timestamp >= %s
                ORDER BY a.timestamp DESC
                LIMIT %s
                """,
                (int(admin_id), since, int(limit)),
            )
            return [
                ActivityItem(
                    type=ActivityType.ATTENDANCE,
                    name=r["name"],
                    timestamp=r["timestamp"],
                    status=AttendanceStatus(r["status"]),
                    employee_id=int(r["employee_id"]),
                )
                for r in fetchall(cur)
            ]

    def recent_employees(self, admin_id: int, *, since: datetime, limit: int) -> Sequence[ActivityItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, name, created_at
                FROM employees
                WHERE admin_id=%s AND created_at >= %s
                ORDER BY created_at DESC
                LIMIT %s
                """,
                (int(admin_id), since, int(limit)),
            )
            return [
                ActivityItem(
                    type=ActivityType.EMPLOYEE,
                    name=r["name"],
                    timestamp=r["created_at"],
                    employee_id=int(r["employee_id"]),
                )
                for r in fetchall(cur)
            ]

    def daily_status_counts(self, admin_id: int, *, start: date, end: date) -> Sequence[DailyStatusCount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.work_date, a.status, COUNT(*) AS total
                FROM attendance a
                JOIN employees e ON e.employee_id = a.employee_id
                WHERE e.admin_id=%s AND a.work_date BETWEEN %s AND %s
                GROUP BY a.work_date, a.status
                ORDER BY a.work_date
                """,
                (int(admin_id), start, end),
            )
            return [
                DailyStatusCount(
                    work_date=r["work_date"],
                    status=AttendanceStatus(r["status"]),
                    count=as_int(r["total"]),
                )
                for r in fetchall(cur)
            ]

    def search_contacts(self, admin_id: int, term: str, *, limit: int) -> Sequence[Employee]:
        pattern = like_pattern(term)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, admin_id, name, email, phone, position, department
                FROM employees
                WHERE admin_id=%s AND (name LIKE %s OR email LIKE %s OR phone LIKE %s)
                ORDER BY name
                LIMIT %s
                """,
                (int(admin_id), pattern, pattern, pattern, int(limit)),
            )
            return [
                Employee(
                    employee_id=int(r["employee_id"]),
                    admin_id=int(r["admin_id"]),
                    name=r["name"],
                    email=r["email"],
                    phone=r.get("phone"),
                    position=r.get("position"),
                    department=r.get("department"),
                )
                for r in fetchall(cur)
            ]
