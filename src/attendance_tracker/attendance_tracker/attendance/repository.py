from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceExportRow, AttendanceRecord, AttendanceStats


class AttendanceRepository(Protocol):
    def get_latest_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        status: AttendanceStatus,
        timestamp: datetime,
        work_date: date,
        notes: Optional[str] = None,
    ) -> int:
        """Insert a mark; raises ConflictError if the employee already has one that day."""
        raise NotImplementedError

    def update_status(self, attendance_id: int, *, status: AttendanceStatus, notes: Optional[str] = None) -> bool:
        raise NotImplementedError

    def get_stats(self, employee_id: int) -> AttendanceStats:
        raise NotImplementedError

    def export_rows_for_admin(self, admin_id: int) -> Sequence[AttendanceExportRow]:
        raise NotImplementedError

    def delete_for_employee(self, employee_id: int) -> int:
        raise NotImplementedError
