from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ActivityType, AttendanceStatus


@dataclass(frozen=True)
class EmployeeStatusRow:
    """Read-model: an employee with today's attendance row, if any."""

    employee_id: int
    name: str
    email: str
    phone: Optional[str]
    department: Optional[str]
    position: Optional[str]
    status: Optional[AttendanceStatus] = None
    timestamp: Optional[datetime] = None
    attendance_id: Optional[int] = None


@dataclass(frozen=True)
class ActivityItem:
    type: ActivityType
    name: str
    timestamp: datetime
    status: Optional[AttendanceStatus] = None
    employee_id: Optional[int] = None

    @property
    def description(self) -> str:
        if self.type is ActivityType.ATTENDANCE and self.status is not None:
            return f"{self.name} marked as {self.status.value}"
        return f"New employee added: {self.name}"

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "employee_id": self.employee_id,
            "description": self.description,
            "status": self.status.value if self.status else None,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class DailyStatusCount:
    work_date: date
    status: AttendanceStatus
    count: int
