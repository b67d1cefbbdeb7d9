from __future__ import annotations

from datetime import date, datetime

from autoplan.scheduler.availability import bookings_for_day, get_available_slots
from autoplan.scheduler.models import DaySetting, ExistingBooking, TimeInterval, Weekday, WorkingHoursProfile

MONDAY = date(2025, 1, 6)
SUNDAY = date(2025, 1, 12)


def test_week_of_default_profile() -> None:
    slots = get_available_slots(MONDAY, SUNDAY, WorkingHoursProfile.default(), [])

    assert len(slots) == 5
    assert [slot.start.date() for slot in slots] == [date(2025, 1, day) for day in range(6, 11)]
    assert all(slot.duration_minutes == 480 for slot in slots)


def test_slots_are_chronological() -> None:
    bookings = [
        ExistingBooking(start=datetime(2025, 1, 7, 12), end=datetime(2025, 1, 7, 13)),
        ExistingBooking(start=datetime(2025, 1, 6, 10), end=datetime(2025, 1, 6, 11)),
    ]

    slots = get_available_slots(MONDAY, date(2025, 1, 7), WorkingHoursProfile.default(), bookings)

    starts = [slot.start for slot in slots]
    assert starts == sorted(starts)
    assert len(slots) == 4


def test_non_working_day_ignores_bookings() -> None:
    bookings = [ExistingBooking(start=datetime(2025, 1, 11, 10), end=datetime(2025, 1, 11, 11))]

    assert get_available_slots(date(2025, 1, 11), date(2025, 1, 12), WorkingHoursProfile.default(), bookings) == []


def test_multi_day_booking_blocks_every_day_it_spans() -> None:
    bookings = [ExistingBooking(start=datetime(2025, 1, 6, 16), end=datetime(2025, 1, 7, 10))]

    slots = get_available_slots(MONDAY, date(2025, 1, 7), WorkingHoursProfile.default(), bookings)

    assert slots == [
        TimeInterval(start=datetime(2025, 1, 6, 9), end=datetime(2025, 1, 6, 16)),
        TimeInterval(start=datetime(2025, 1, 7, 10), end=datetime(2025, 1, 7, 17)),
    ]


def test_bookings_for_day_selects_any_overlap() -> None:
    spanning = ExistingBooking(start=datetime(2025, 1, 5, 20), end=datetime(2025, 1, 8, 9))
    later = ExistingBooking(start=datetime(2025, 1, 9, 9), end=datetime(2025, 1, 9, 10))

    assert bookings_for_day(date(2025, 1, 7), [spanning, later]) == [
        TimeInterval(start=spanning.start, end=spanning.end)
    ]
    assert bookings_for_day(date(2025, 1, 10), [spanning, later]) == []


def test_availability_is_idempotent() -> None:
    profile = WorkingHoursProfile(
        days=[
            DaySetting(day=Weekday.MONDAY, start="08:00", end="12:00"),
            DaySetting(day=Weekday.WEDNESDAY, start="13:00", end="18:00"),
        ]
    )
    bookings = [ExistingBooking(start=datetime(2025, 1, 8, 14), end=datetime(2025, 1, 8, 15))]

    first = get_available_slots(MONDAY, SUNDAY, profile, bookings)
    second = get_available_slots(MONDAY, SUNDAY, profile, bookings)

    assert first == second
    assert len(first) == 3


def test_datetime_bounds_use_calendar_days() -> None:
    slots = get_available_slots(
        datetime(2025, 1, 6, 23, 0),
        datetime(2025, 1, 6, 0, 30),
        WorkingHoursProfile.default(),
        [],
    )

    assert len(slots) == 1


def test_reversed_range_is_empty() -> None:
    assert get_available_slots(SUNDAY, MONDAY, WorkingHoursProfile.default(), []) == []
