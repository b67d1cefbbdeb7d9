from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta

from .free_busy import free_slots_for_day
from .models import ExistingBooking, TimeInterval, WorkingHoursProfile
from .working_hours import working_interval


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def iter_days(start_date: date | datetime, end_date: date | datetime) -> Iterable[date]:
    current = _as_date(start_date)
    last = _as_date(end_date)
    while current <= last:
        yield current
        current += timedelta(days=1)


def bookings_for_day(day: date, bookings: Iterable[ExistingBooking]) -> list[TimeInterval]:
    """Bookings touching ``day``; multi-day bookings count on every day they span."""

    return [
        TimeInterval(start=booking.start, end=booking.end)
        for booking in bookings
        if booking.start.date() <= day <= booking.end.date()
    ]


def get_available_slots(
    start_date: date | datetime,
    end_date: date | datetime,
    profile: WorkingHoursProfile,
    bookings: Sequence[ExistingBooking],
) -> list[TimeInterval]:
    """Ordered free slots across ``[start_date, end_date]`` (both days inclusive)."""

    slots: list[TimeInterval] = []
    for day in iter_days(start_date, end_date):
        window = working_interval(day, profile)
        if window is None:
            continue
        slots.extend(free_slots_for_day(day, window, bookings_for_day(day, bookings)))
    return slots


__all__ = ["bookings_for_day", "get_available_slots", "iter_days"]
