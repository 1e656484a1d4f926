from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class EmployeeReportRow:
    employee_id: int
    name: str
    email: str
    department: Optional[str] = None
    present: int = 0
    late: int = 0
    absent: int = 0

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "name": self.name,
            "email": self.email,
            "department": self.department,
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
        }


@dataclass(frozen=True)
class ReportData:
    start: date
    end: date
    type: Optional[str] = None
    period: Optional[str] = None
    rows: list[EmployeeReportRow] = field(default_factory=list)

    @property
    def total_present(self) -> int:
        return sum(r.present for r in self.rows)

    @property
    def total_late(self) -> int:
        return sum(r.late for r in self.rows)

    @property
    def total_absent(self) -> int:
        return sum(r.absent for r in self.rows)

    def to_dict(self) -> dict:
        return {
            "totalEmployees": len(self.rows),
            "totalPresent": self.total_present,
            "totalLate": self.total_late,
            "totalAbsent": self.total_absent,
            "startDate": self.start.isoformat(),
            "endDate": self.end.isoformat(),
            "type": self.type,
            "period": self.period,
            "attendanceDetails": [r.to_dict() for r in self.rows],
        }
