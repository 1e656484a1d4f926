from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import EmployeeReportRow


class ReportRepository(Protocol):
    def employee_counts(self, admin_id: int, *, start: date, end: date) -> Sequence[EmployeeReportRow]:
        """Every employee of the admin with status counts in [start, end]; zero when unmarked."""
        raise NotImplementedError
