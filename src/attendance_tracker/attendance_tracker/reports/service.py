from __future__ import annotations

import io
from datetime import datetime
from typing import Any, Optional

import pandas as pd

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import optional_str
from ..core.constants import DEFAULT_UTC_OFFSET_HOURS
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..dashboard.repository import DashboardRepository
from .model import ReportData
from .repository import ReportRepository

_EXCEL_COLUMNS = {
    "employee_id": "Employee ID",
    "name": "Name",
    "email": "Email",
    "department": "Department",
    "present": "Present",
    "late": "Late",
    "absent": "Absent",
}


class ReportService:
    def __init__(
        self,
        reports: ReportRepository,
        dashboard: DashboardRepository,
        *,
        utc_offset_hours: int = DEFAULT_UTC_OFFSET_HOURS,
    ):
        self._reports = reports
        self._dashboard = dashboard
        self._utc_offset_hours = int(utc_offset_hours)

    def generate(
        self,
        admin_id: int,
        *,
        start_date: Any,
        end_date: Any,
        report_type: Optional[str] = None,
        period: Optional[str] = None,
    ) -> ReportData:
        if not start_date or not end_date:
            raise ValidationError("Start date and end date are required")
        start = parse_iso_date(start_date, "startDate")
        end = parse_iso_date(end_date, "endDate")
        if start > end:
            raise ValidationError("startDate must be on or before endDate")

        rows = sorted(self._reports.employee_counts(admin_id, start=start, end=end), key=lambda r: r.name.lower())
        return ReportData(start=start, end=end, type=optional_str(report_type), period=optional_str(period), rows=rows)

    def summary(self, admin_id: int, *, now: Optional[datetime] = None) -> dict:
        today = (now or now_local(self._utc_offset_hours)).date()
        total = self._dashboard.count_employees(admin_id)
        if total == 0:
            return {"totalEmployees": 0, "todayPresent": 0, "todayLate": 0, "todayAbsent": 0}

        counts = self._dashboard.status_counts_on(admin_id, today)
        present = counts.get(AttendanceStatus.PRESENT, 0)
        late = counts.get(AttendanceStatus.LATE, 0)
        # Anyone not marked Present or Late today counts as absent.
        return {
            "totalEmployees": total,
            "todayPresent": present,
            "todayLate": late,
            "todayAbsent": total - present - late,
        }

    def export_excel(self, admin_id: int, *, start_date: Any, end_date: Any) -> bytes:
        report = self.generate(admin_id, start_date=start_date, end_date=end_date)

        df = pd.DataFrame([r.to_dict() for r in report.rows], columns=list(_EXCEL_COLUMNS))
        df = df.rename(columns=_EXCEL_COLUMNS)

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Attendance")
        return output.getvalue()
