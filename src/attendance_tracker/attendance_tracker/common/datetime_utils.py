from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from ..core.exceptions import ValidationError


def parse_iso_date(value: str, field_name: str = "date") -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")


def parse_hhmm(value: str) -> time:
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_local(utc_offset_hours: int) -> datetime:
    """Current wall-clock time at a fixed UTC offset, as a naive datetime.

    Note: Independent of the server timezone; wrapped so tests can pass a fixed `now`.
    """
    tz = timezone(timedelta(hours=utc_offset_hours))
    return datetime.now(tz).replace(tzinfo=None)


def day_label(d: date) -> str:
    """Short chart label, e.g. 'Oct 19'."""
    return f"{d.strftime('%b')} {d.day}"


def iso_or_empty(value: datetime | None) -> str:
    return value.isoformat() if value else ""


def utc_offset_label(hours: int) -> str:
    """MySQL session time zone for a whole-hour offset, e.g. 3 -> '+03:00'."""
    sign = "+" if hours >= 0 else "-"
    return f"{sign}{abs(int(hours)):02d}:00"
