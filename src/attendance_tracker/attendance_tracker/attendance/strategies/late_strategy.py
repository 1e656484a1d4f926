from __future__ import annotations

from datetime import datetime, time

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Marked after the cutoff; the note records by how many minutes."""

    def decide_mark(self, *, now: datetime, cutoff: time) -> StatusDecision:
        cutoff_dt = datetime.combine(now.date(), cutoff)
        late_minutes = int((now - cutoff_dt).total_seconds() // 60)
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Late by {late_minutes} min")
