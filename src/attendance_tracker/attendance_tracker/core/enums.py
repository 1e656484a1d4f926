from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status values as stored in the database."""

    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"


class ActivityType(str, Enum):
    """Kinds of events shown in the dashboard activity feed."""

    ATTENDANCE = "attendance"
    EMPLOYEE = "employee"
