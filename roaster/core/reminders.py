"""Weekly order reminder schedule

Reminder settings are stored as a local weekday/hour in an IANA timezone.
These helpers convert that to UTC and describe it. Nothing here sends mail.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

DAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

TIMEZONE_LABELS = {
    "America/Los_Angeles": "Pacific Time",
    "America/Denver": "Mountain Time",
    "America/Chicago": "Central Time",
    "America/New_York": "Eastern Time",
    "America/Phoenix": "Arizona Time",
    "America/Anchorage": "Alaska Time",
    "Pacific/Honolulu": "Hawaii Time",
    "UTC": "UTC",
}


def _sunday_based(dt: datetime) -> int:
    # datetime.weekday() is Monday=0
    return (dt.weekday() + 1) % 7


def validate_schedule(day_of_week: int, hour: int, tz_name: str) -> None:
    if not 0 <= day_of_week <= 6:
        raise ValueError("day_of_week must be between 0 (Sunday) and 6 (Saturday)")
    if not 0 <= hour <= 23:
        raise ValueError("hour must be between 0 and 23")
    if tz_name not in available_timezones():
        raise ValueError(f"unknown timezone: {tz_name}")


def to_utc(hour: int, day_of_week: int, tz_name: str, now: Optional[datetime] = None) -> Tuple[int, int, datetime]:
    """Next occurrence of ``day_of_week`` at ``hour`` local time, in UTC.

    Returns ``(utc_hour, utc_day, utc_datetime)`` with ``utc_day`` counted
    from Sunday = 0.
    """
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"unknown timezone: {tz_name}") from exc

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local_now = now.astimezone(tz)

    days_until = (day_of_week - _sunday_based(local_now)) % 7
    target_day = local_now.date() + timedelta(days=days_until)
    target = datetime(target_day.year, target_day.month, target_day.day, hour, tzinfo=tz)
    utc_target = target.astimezone(timezone.utc)
    return utc_target.hour, _sunday_based(utc_target), utc_target


def is_reminder_time(settings, now: Optional[datetime] = None) -> bool:
    if not settings.is_active:
        return False
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    utc_hour, utc_day, _ = to_utc(settings.hour, settings.day_of_week, settings.timezone, now)
    return _sunday_based(now) == utc_day and now.hour == utc_hour


def timezone_label(tz_name: str) -> str:
    return TIMEZONE_LABELS.get(tz_name, tz_name)


def _clock(hour: int) -> str:
    if hour == 0:
        return "12:00 AM"
    if hour < 12:
        return f"{hour}:00 AM"
    if hour == 12:
        return "12:00 PM"
    return f"{hour - 12}:00 PM"


def schedule_description(settings) -> str:
    """e.g. ``Monday at 9:00 AM (Pacific Time)``"""
    return f"{DAYS[settings.day_of_week]} at {_clock(settings.hour)} ({timezone_label(settings.timezone)})"
