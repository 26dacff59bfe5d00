"""
Centralized utilities for time handling.

Timestamps are stored as UTC. A "study day" is a calendar date in the study
timezone whose boundary can be moved from midnight to a rollover hour.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

import pytz


def utcnow() -> datetime:
    """
    Get the current timezone-aware UTC datetime.
    Always use this instead of datetime.utcnow() or datetime.now().
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (as SQLite returns them) as UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_datetime(value) -> Optional[datetime]:
    """Parse an ISO string (``Z`` suffix allowed) or pass a datetime through, always UTC."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    try:
        return ensure_utc(datetime.fromisoformat(str(value).replace('Z', '+00:00')))
    except ValueError:
        return None


def get_timezone(tz_name: Optional[str]):
    try:
        return pytz.timezone(tz_name or 'UTC')
    except pytz.UnknownTimeZoneError:
        return pytz.UTC


def study_today(
    now: Optional[datetime] = None,
    rollover_hour: int = 0,
    tz_name: str = 'UTC'
) -> date:
    """
    Return the current study date.

    Before ``rollover_hour`` local time the previous calendar date is still
    the study day.
    """
    now = ensure_utc(now) or utcnow()
    local_now = now.astimezone(get_timezone(tz_name))
    if local_now.hour < rollover_hour:
        return local_now.date() - timedelta(days=1)
    return local_now.date()


def study_day_start(
    study_date: date,
    rollover_hour: int = 0,
    tz_name: str = 'UTC'
) -> datetime:
    """UTC instant at which ``study_date`` begins."""
    tz = get_timezone(tz_name)
    local_start = tz.localize(datetime.combine(study_date, time(hour=rollover_hour)))
    return local_start.astimezone(timezone.utc)


def is_due(
    next_review: Optional[datetime],
    now: Optional[datetime] = None,
    rollover_hour: int = 0
) -> bool:
    """
    A review is due once its scheduled instant is not in the future.

    With a rollover hour "now" is pushed forward by that many hours, so a
    review scheduled for the next study day is already due after midnight.
    """
    if next_review is None:
        return False
    now = ensure_utc(now) or utcnow()
    if rollover_hour > 0:
        now = now + timedelta(hours=rollover_hour)
    return ensure_utc(next_review) <= now


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime('%Y-%m-%d')
