from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, Sequence

from ..core.enums import AttendanceStatus
from ..employees.model import Employee
from .model import ActivityItem, DailyStatusCount, EmployeeStatusRow


class DashboardRepository(Protocol):
    """Read-only aggregation queries, always scoped by admin id."""

    def count_employees(self, admin_id: int) -> int:
        raise NotImplementedError

    def count_employees_created_on(self, admin_id: int, day: date) -> int:
        raise NotImplementedError

    def status_counts_on(self, admin_id: int, day: date) -> dict[AttendanceStatus, int]:
        raise NotImplementedError

    def employee_status_on(self, admin_id: int, day: date) -> Sequence[EmployeeStatusRow]:
        raise NotImplementedError

    def recent_attendance(self, admin_id: int, *, since: datetime, limit: int) -> Sequence[ActivityItem]:
        raise NotImplementedError

    def recent_employees(self, admin_id: int, *, since: datetime, limit: int) -> Sequence[ActivityItem]:
        raise NotImplementedError

    def daily_status_counts(self, admin_id: int, *, start: date, end: date) -> Sequence[DailyStatusCount]:
        raise NotImplementedError

    def search_contacts(self, admin_id: int, term: str, *, limit: int) -> Sequence[Employee]:
        raise NotImplementedError
