from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_int, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceExportRow, AttendanceRecord, AttendanceStats
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_latest_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, status, timestamp, work_date, notes
                FROM attendance
                WHERE employee_id=%s AND work_date=%s
                ORDER BY timestamp DESC
                LIMIT 1
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceRecord(
                attendance_id=int(r["attendance_id"]),
                employee_id=int(r["employee_id"]),
                status=AttendanceStatus(r["status"]),
                timestamp=r["timestamp"],
                work_date=r["work_date"],
                notes=r.get("notes"),
            )

    def create(
        self,
        *,
        employee_id: int,
        status: AttendanceStatus,
        timestamp: datetime,
        work_date: date,
        notes: Optional[str] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(employee_id, status, timestamp, work_date, notes)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(employee_id), status.value, timestamp, work_date, notes),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Attendance already marked for today") from e
            raise

    def update_status(self, attendance_id: int, *, status: AttendanceStatus, notes: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET status=%s, notes=COALESCE(%s, notes) WHERE attendance_id=%s",
                (status.value, notes, int(attendance_id)),
            )
            return cur.rowcount > 0

    def get_stats(self, employee_id: int) -> AttendanceStats:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    COUNT(*) AS total_days,
                    COUNT(CASE WHEN status = 'Present' THEN 1 END) AS present_days,
                    COUNT(CASE WHEN status = 'Late' THEN 1 END) AS late_days,
                    COUNT(CASE WHEN status = 'Absent' THEN 1 END) AS absent_days
                FROM attendance
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur) or {}
            return AttendanceStats(
                total_days=as_int(r.get("total_days")),
                present_days=as_int(r.get("present_days")),
                late_days=as_int(r.get("late_days")),
                absent_days=as_int(r.get("absent_days")),
            )

    def export_rows_for_admin(self, admin_id: int) -> Sequence[AttendanceExportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.attendance_id, a.employee_id, e.name, e.email, e.phone, e.department, e.position,
                       a.status, a.timestamp
                FROM attendance a
                JOIN employees e ON e.employee_id = a.employee_id
                WHERE e.admin_id=%s
                ORDER BY a.timestamp DESC
                """,
                (int(admin_id),),
            )
            return [
                AttendanceExportRow(
                    attendance_id=int(r["attendance_id"]),
                    employee_id=int(r["employee_id"]),
                    name=r["name"],
                    email=r["email"],
                    phone=r.get("phone"),
                    department=r.get("department"),
                    position=r.get("position"),
                    status=AttendanceStatus(r["status"]),
                    timestamp=r.get("timestamp"),
                )
                for r in fetchall(cur)
            ]

    def delete_for_employee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE employee_id=%s", (int(employee_id),))
            return int(cur.rowcount)
