from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_mark(self, *, now: datetime, cutoff: time) -> AttendanceStrategy:
        # `now` is local wall-clock time; exactly on the cutoff still counts as on time.
        if now.time() <= cutoff:
            return PresentStrategy()
        return LateStrategy()
