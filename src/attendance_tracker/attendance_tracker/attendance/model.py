from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark of an employee on a local calendar day."""

    attendance_id: int
    employee_id: int
    status: AttendanceStatus
    timestamp: datetime
    work_date: date
    notes: Optional[str] = None


@dataclass(frozen=True)
class AttendanceStats:
    total_days: int = 0
    present_days: int = 0
    late_days: int = 0
    absent_days: int = 0

    def to_dict(self) -> dict:
        return {
            "total_days": self.total_days,
            "present_days": self.present_days,
            "late_days": self.late_days,
            "absent_days": self.absent_days,
        }


@dataclass(frozen=True)
class AttendanceExportRow:
    """Read-model for CSV export (attendance joined with its employee)."""

    attendance_id: int
    employee_id: int
    name: str
    email: str
    phone: Optional[str]
    department: Optional[str]
    position: Optional[str]
    status: AttendanceStatus
    timestamp: Optional[datetime]
