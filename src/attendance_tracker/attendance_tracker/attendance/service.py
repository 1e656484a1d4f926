from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from datetime import datetime, time
from typing import Any, Optional

from ..common.datetime_utils import iso_or_empty, now_local
from ..common.validators import optional_str
from ..core.constants import CSV_EXPORT_COLUMNS, DEFAULT_UTC_OFFSET_HOURS, SUGGESTION_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.qr import parse_qr_payload
from ..employees.repository import EmployeeRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, AttendanceStats
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkResult:
    status: AttendanceStatus
    timestamp: datetime
    employee: Employee

    def to_dict(self) -> dict:
        return {
            "message": f"Attendance marked as {self.status.value}",
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
            "employee": self.employee.to_contact(),
        }


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        utc_offset_hours: int = DEFAULT_UTC_OFFSET_HOURS,
        late_cutoff: time = time(8, 30),
    ):
        self._attendance = attendance
        self._employees = employees
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._utc_offset_hours = int(utc_offset_hours)
        self._late_cutoff = late_cutoff

    def _now(self, now: datetime | None) -> datetime:
        return now or now_local(self._utc_offset_hours)

    def _find_employee(self, employee_id: Any) -> Employee:
        raw = "" if employee_id is None else str(employee_id).strip()
        if not raw:
            raise ValidationError("Employee ID is required")

        employee = None
        try:
            employee = self._employees.get_by_id(int(raw))
        except ValueError:
            pass
        if employee:
            return employee

        similar = self._employees.find_similar(raw, limit=SUGGESTION_LIMIT)
        message = "Employee not found. Please check the employee ID or contact administrator."
        if similar:
            hints = ", ".join(f"{e.name} (ID: {e.employee_id})" for e in similar)
            message = f"Employee not found. Did you mean: {hints}?"
        raise NotFoundError(
            message,
            payload={"suggestions": [e.to_contact() for e in similar], "searchedId": raw},
        )

    @staticmethod
    def _already_marked(existing: AttendanceRecord | None, employee: Employee) -> ConflictError:
        payload: dict[str, Any] = {"employee": employee.to_contact()}
        if existing:
            payload["status"] = existing.status.value
            payload["timestamp"] = existing.timestamp.isoformat()
        return ConflictError("Attendance already marked for today", payload=payload)

    def mark_attendance(self, employee_id: Any, *, now: datetime | None = None) -> MarkResult:
        employee = self._find_employee(employee_id)
        now = self._now(now)
        today = now.date()

        existing = self._attendance.get_latest_for_employee_and_date(employee.employee_id, today)
        if existing:
            raise self._already_marked(existing, employee)

        strategy = self._factory.for_mark(now=now, cutoff=self._late_cutoff)
        decision = strategy.decide_mark(now=now, cutoff=self._late_cutoff)

        try:
            self._attendance.create(
                employee_id=employee.employee_id,
                status=decision.status,
                timestamp=now,
                work_date=today,
                notes=decision.note,
            )
        except ConflictError:
            # Lost the race against a concurrent scan of the same employee.
            existing = self._attendance.get_latest_for_employee_and_date(employee.employee_id, today)
            raise self._already_marked(existing, employee)

        logger.info("Attendance marked: %s (id=%s) %s", employee.name, employee.employee_id, decision.status.value)
        return MarkResult(status=decision.status, timestamp=now, employee=employee)

    def mark_from_qr(self, qr_text: Any, *, now: datetime | None = None) -> MarkResult:
        return self.mark_attendance(parse_qr_payload(qr_text), now=now)

    def update_attendance(
        self,
        employee_id: Any,
        *,
        status: Any,
        reason: Optional[str] = None,
        now: datetime | None = None,
    ) -> tuple[AttendanceStatus, AttendanceStatus]:
        """Overwrite today's mark; returns (old_status, new_status)."""
        if not status:
            raise ValidationError("Status is required")
        try:
            new_status = AttendanceStatus(str(status))
        except ValueError:
            allowed = ", ".join(s.value for s in AttendanceStatus)
            raise ValidationError(f"Invalid status. Must be one of: {allowed}")

        employee = self._find_employee(employee_id)
        today = self._now(now).date()

        record = self._attendance.get_latest_for_employee_and_date(employee.employee_id, today)
        if not record:
            raise NotFoundError("No attendance record found for today")

        self._attendance.update_status(record.attendance_id, status=new_status, notes=optional_str(reason))
        logger.info(
            "Attendance updated: %s (id=%s) %s -> %s",
            employee.name,
            employee.employee_id,
            record.status.value,
            new_status.value,
        )
        return record.status, new_status

    def get_stats(self, employee_id: Any) -> AttendanceStats:
        try:
            employee = self._employees.get_by_id(int(str(employee_id).strip()))
        except ValueError:
            employee = None
        if not employee:
            raise NotFoundError("Employee not found")
        return self._attendance.get_stats(employee.employee_id)

    def export_csv(self, admin_id: int) -> str:
        out = io.StringIO()
        # Plain header line; only data cells are quoted.
        out.write(",".join(CSV_EXPORT_COLUMNS) + "\n")
        writer = csv.DictWriter(out, fieldnames=list(CSV_EXPORT_COLUMNS), quoting=csv.QUOTE_ALL, lineterminator="\n")
        for row in self._attendance.export_rows_for_admin(admin_id):
            writer.writerow(
                {
                    "attendance_id": row.attendance_id,
                    "employee_id": row.employee_id,
                    "name": row.name,
                    "email": row.email,
                    "phone": row.phone or "",
                    "department": row.department or "",
                    "position": row.position or "",
                    "status": row.status.value,
                    "timestamp": iso_or_empty(row.timestamp),
                }
            )
        return out.getvalue()
