from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from .errors import ValidationError

TIME_FORMATS = ("%H:%M", "%H:%M:%S")


def parse_time_of_day(value: str, shift_id: Optional[str] = None) -> time:
    """Parse an ``HH:MM`` (or ``HH:MM:SS``) local time of day."""

    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime((value or "").strip(), fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Shift {shift_id} has an unparseable time of day: {value!r}", shift_id=shift_id)


def shift_bounds(shift_date: date, start: str, end: str, shift_id: Optional[str] = None) -> Tuple[datetime, datetime]:
    start_at = datetime.combine(shift_date, parse_time_of_day(start, shift_id))
    end_at = datetime.combine(shift_date, parse_time_of_day(end, shift_id))
    # overnight shift
    if end_at <= start_at:
        end_at += timedelta(days=1)
    return start_at, end_at


def elapsed_minutes(start: datetime, end: datetime) -> int:
    # whole minutes, truncated toward zero
    return int((end - start).total_seconds() / 60)


def scheduled_hours(shift_date: date, start: str, end: str, shift_id: Optional[str] = None) -> float:
    start_at, end_at = shift_bounds(shift_date, start, end, shift_id)
    return elapsed_minutes(start_at, end_at) / 60


def weeks_in_period(period_start: date, period_end: date) -> int:
    days = (period_end - period_start).days
    return max(1, math.ceil(days / 7))


def resolve_timezone(name: str | None) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def local_date(instant: datetime, tz: tzinfo) -> date:
    """Calendar date of an instant in the configured zone; naive values are taken as local already."""

    if instant.tzinfo is None:
        return instant.date()
    return instant.astimezone(tz).date()


def overlap_days(start: date, end: date, period_start: date, period_end: date) -> int:
    first = max(start, period_start)
    last = min(end, period_end)
    if last < first:
        return 0
    return (last - first).days + 1


def as_aware(instant: datetime, tz: tzinfo) -> datetime:
    """Attach the configured zone to a naive wall-clock instant; aware values pass through."""

    if instant.tzinfo is None:
        return instant.replace(tzinfo=tz)
    return instant
