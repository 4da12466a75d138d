from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from roaster.core.reminders import (
    is_reminder_time, schedule_description, timezone_label, to_utc, validate_schedule,
)


def settings(**overrides):
    values = dict(day_of_week=1, hour=9, timezone="America/Los_Angeles", is_active=True)
    values.update(overrides)
    return SimpleNamespace(**values)


def test_converts_local_schedule_to_utc():
    # Wednesday 2024-07-03; Los Angeles is UTC-7 in July
    now = datetime(2024, 7, 3, 12, tzinfo=timezone.utc)
    utc_hour, utc_day, when = to_utc(9, 1, "America/Los_Angeles", now)
    assert (utc_hour, utc_day) == (16, 1)
    assert when == datetime(2024, 7, 8, 16, tzinfo=timezone.utc)


def test_conversion_can_move_to_the_next_utc_day():
    now = datetime(2024, 1, 10, tzinfo=timezone.utc)
    utc_hour, utc_day, _ = to_utc(20, 5, "America/New_York", now)
    # Friday 20:00 EST is Saturday 01:00 UTC
    assert (utc_hour, utc_day) == (1, 6)


def test_is_reminder_time():
    monday_nine_pdt = datetime(2024, 7, 8, 16, 30, tzinfo=timezone.utc)
    assert is_reminder_time(settings(), monday_nine_pdt)
    assert not is_reminder_time(settings(), datetime(2024, 7, 8, 17, tzinfo=timezone.utc))
    assert not is_reminder_time(settings(is_active=False), monday_nine_pdt)


def test_schedule_description():
    assert schedule_description(settings()) == "Monday at 9:00 AM (Pacific Time)"
    assert schedule_description(settings(day_of_week=0, hour=0, timezone="UTC")) == "Sunday at 12:00 AM (UTC)"
    assert schedule_description(settings(day_of_week=5, hour=12)) == "Friday at 12:00 PM (Pacific Time)"
    assert schedule_description(settings(day_of_week=6, hour=17)) == "Saturday at 5:00 PM (Pacific Time)"


def test_timezone_label_falls_back_to_name():
    assert timezone_label("America/Chicago") == "Central Time"
    assert timezone_label("Europe/Paris") == "Europe/Paris"


@pytest.mark.parametrize("day,hour,tz", [(7, 9, "UTC"), (-1, 9, "UTC"), (1, 24, "UTC"), (1, 9, "Mars/Olympus")])
def test_validate_schedule_rejects_bad_values(day, hour, tz):
    with pytest.raises(ValueError):
        validate_schedule(day, hour, tz)
