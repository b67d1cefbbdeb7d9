from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timedelta

from .models import TimeInterval, Weekday, WorkingHoursProfile


logger = logging.getLogger(__name__)

_CLOCK_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")


def parse_clock(value: str | None) -> int | None:
    """Convert an ``HH:mm`` string into minutes from midnight, ``None`` if malformed."""

    if not value:
        return None
    match = _CLOCK_PATTERN.match(value.strip())
    if match is None:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def start_of_day(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.min)


def working_interval(day: date | datetime, profile: WorkingHoursProfile) -> TimeInterval | None:
    """Return the working window for ``day`` or ``None`` when nothing can be placed that day."""

    weekday = Weekday.for_date(day)
    setting = profile.setting_for(weekday)
    if setting is None or not setting.is_working_day:
        return None

    start_minutes = parse_clock(setting.start)
    end_minutes = parse_clock(setting.end)
    if start_minutes is None or end_minutes is None or start_minutes >= end_minutes:
        logger.warning("Invalid working hours for %s: %s-%s", weekday.value, setting.start, setting.end)
        return None

    midnight = start_of_day(day)
    return TimeInterval(
        start=midnight + timedelta(minutes=start_minutes),
        end=midnight + timedelta(minutes=end_minutes),
    )


__all__ = ["parse_clock", "start_of_day", "working_interval"]
