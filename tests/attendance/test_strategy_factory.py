from datetime import datetime, time

from src.attendance_tracker.attendance_tracker.attendance.factory import AttendanceStrategyFactory
from src.attendance_tracker.attendance_tracker.attendance.strategies.late_strategy import LateStrategy
from src.attendance_tracker.attendance_tracker.attendance.strategies.present_strategy import PresentStrategy
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus

CUTOFF = time(8, 30)


def test_factory_exactly_on_cutoff_is_present():
    now = datetime(2025, 1, 6, 8, 30, 0)

    strategy = AttendanceStrategyFactory().for_mark(now=now, cutoff=CUTOFF)

    assert isinstance(strategy, PresentStrategy)
    assert strategy.decide_mark(now=now, cutoff=CUTOFF).status == AttendanceStatus.PRESENT


def test_factory_one_second_after_cutoff_is_late():
    now = datetime(2025, 1, 6, 8, 30, 1)

    strategy = AttendanceStrategyFactory().for_mark(now=now, cutoff=CUTOFF)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_mark(now=now, cutoff=CUTOFF).status == AttendanceStatus.LATE


def test_late_note_counts_whole_minutes():
    now = datetime(2025, 1, 6, 9, 15, 59)

    decision = LateStrategy().decide_mark(now=now, cutoff=CUTOFF)

    assert decision.note == "Late by 45 min"


def test_factory_early_morning_is_present():
    now = datetime(2025, 1, 6, 0, 5, 0)

    strategy = AttendanceStrategyFactory().for_mark(now=now, cutoff=CUTOFF)

    assert isinstance(strategy, PresentStrategy)
