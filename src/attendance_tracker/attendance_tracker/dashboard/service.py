from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Any, Optional

from ..common.datetime_utils import day_label, now_local
from ..core.constants import (
    DEFAULT_TREND_DAYS,
    DEFAULT_UTC_OFFSET_HOURS,
    MIN_SEARCH_LENGTH,
    RECENT_ACTIVITY_DAYS,
    RECENT_ACTIVITY_LIMIT,
    RECENT_ATTENDANCE_LIMIT,
    RECENT_EMPLOYEE_LIMIT,
    SEARCH_LIMIT,
)
from ..core.enums import AttendanceStatus
from .model import ActivityItem
from .repository import DashboardRepository


def percent(numerator: float, denominator: float) -> int:
    """Whole-number percentage, halves rounded up; 0 when there is nothing to compare to."""
    if not denominator:
        return 0
    return int(math.floor(numerator / denominator * 100 + 0.5))


def parse_trend_days(value: Any) -> int:
    try:
        days = int(str(value).strip())
    except (TypeError, ValueError):
        return DEFAULT_TREND_DAYS
    return days if days > 0 else DEFAULT_TREND_DAYS


class DashboardService:
    """Aggregations for the admin dashboard; "today" is the local date at the configured offset."""

    def __init__(self, dashboard: DashboardRepository, *, utc_offset_hours: int = DEFAULT_UTC_OFFSET_HOURS):
        self._dashboard = dashboard
        self._utc_offset_hours = int(utc_offset_hours)

    def _now(self, now: Optional[datetime]) -> datetime:
        return now or now_local(self._utc_offset_hours)

    def summary(self, admin_id: int, *, now: Optional[datetime] = None) -> dict:
        today = self._now(now).date()
        yesterday = today - timedelta(days=1)

        total = self._dashboard.count_employees(admin_id)
        new_today = self._dashboard.count_employees_created_on(admin_id, today)
        today_counts = self._dashboard.status_counts_on(admin_id, today)
        yesterday_counts = self._dashboard.status_counts_on(admin_id, yesterday)

        def rate(status: AttendanceStatus) -> int:
            before = yesterday_counts.get(status, 0)
            return percent(today_counts.get(status, 0) - before, before)

        return {
            "totalEmployees": total,
            "newToday": new_today,
            "employeeGrowth": percent(new_today, total),
            "presentToday": today_counts.get(AttendanceStatus.PRESENT, 0),
            "presentRate": rate(AttendanceStatus.PRESENT),
            "lateToday": today_counts.get(AttendanceStatus.LATE, 0),
            "lateRate": rate(AttendanceStatus.LATE),
            "absentToday": today_counts.get(AttendanceStatus.ABSENT, 0),
            "absentRate": rate(AttendanceStatus.ABSENT),
        }

    def employee_status(self, admin_id: int, *, now: Optional[datetime] = None) -> list[dict]:
        today = self._now(now).date()
        out: list[dict] = []
        for row in self._dashboard.employee_status_on(admin_id, today):
            # Unmarked employees are reported as Present.
            status = row.status or AttendanceStatus.PRESENT
            out.append(
                {
                    "employee_id": row.employee_id,
                    "name": row.name,
                    "email": row.email,
                    "phone": row.phone,
                    "department": row.department,
                    "position": row.position,
                    "status": status.value,
                    "timestamp": row.timestamp.isoformat() if row.timestamp else None,
                    "attendance_id": row.attendance_id,
                }
            )
        return out

    def recent_activity(self, admin_id: int, *, now: Optional[datetime] = None) -> list[dict]:
        since = self._now(now) - timedelta(days=RECENT_ACTIVITY_DAYS)
        items: list[ActivityItem] = [
            *self._dashboard.recent_attendance(admin_id, since=since, limit=RECENT_ATTENDANCE_LIMIT),
            *self._dashboard.recent_employees(admin_id, since=since, limit=RECENT_EMPLOYEE_LIMIT),
        ]
        items.sort(key=lambda item: item.timestamp, reverse=True)
        return [item.to_dict() for item in items[:RECENT_ACTIVITY_LIMIT]]

    def attendance_trend(self, admin_id: int, days: Any = DEFAULT_TREND_DAYS, *, now: Optional[datetime] = None) -> dict:
        days = parse_trend_days(days)
        today = self._now(now).date()
        start = today - timedelta(days=days - 1)
        dates = [start + timedelta(days=i) for i in range(days)]

        counts: dict[tuple, int] = {}
        for row in self._dashboard.daily_status_counts(admin_id, start=start, end=today):
            counts[(row.work_date, row.status)] = row.count

        return {
            "labels": [day_label(d) for d in dates],
            "present": [counts.get((d, AttendanceStatus.PRESENT), 0) for d in dates],
            "late": [counts.get((d, AttendanceStatus.LATE), 0) for d in dates],
            "absent": [counts.get((d, AttendanceStatus.ABSENT), 0) for d in dates],
        }

    def department_performance(self, admin_id: int, *, now: Optional[datetime] = None) -> dict:
        counts = self._dashboard.status_counts_on(admin_id, self._now(now).date())
        return {
            "present": counts.get(AttendanceStatus.PRESENT, 0),
            "late": counts.get(AttendanceStatus.LATE, 0),
            "absent": counts.get(AttendanceStatus.ABSENT, 0),
        }

    def search_employees(self, admin_id: int, q: Optional[str]) -> list[dict]:
        term = (q or "").strip()
        if len(term) < MIN_SEARCH_LENGTH:
            return []
        return [e.to_contact() for e in self._dashboard.search_contacts(admin_id, term, limit=SEARCH_LIMIT)]
