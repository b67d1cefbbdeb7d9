from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from .models import TimeInterval
from .working_hours import start_of_day


logger = logging.getLogger(__name__)


def merge_busy(intervals: Iterable[TimeInterval]) -> list[TimeInterval]:
    """Collapse overlapping or touching intervals into a minimal ordered busy set."""

    ordered = sorted(intervals, key=lambda interval: interval.start)
    if not ordered:
        return []

    merged: list[TimeInterval] = []
    current = TimeInterval(start=ordered[0].start, end=ordered[0].end)
    for interval in ordered[1:]:
        if interval.start <= current.end:
            current = TimeInterval(start=current.start, end=max(current.end, interval.end))
        else:
            merged.append(current)
            current = TimeInterval(start=interval.start, end=interval.end)
    merged.append(current)
    return merged


def free_slots_for_day(
    day: date | datetime,
    work_window: TimeInterval,
    busy: Iterable[TimeInterval],
) -> list[TimeInterval]:
    """Free intervals of ``day`` inside ``work_window`` that no busy interval covers."""

    day_start = start_of_day(day)
    day_end = day_start + timedelta(days=1)

    # Outside-of-hours padding so nothing before or after work is offered.
    blocks = [
        TimeInterval(start=day_start, end=work_window.start),
        TimeInterval(start=work_window.end, end=day_end),
    ]
    for interval in busy:
        if not interval.is_valid:
            logger.warning("Skipping invalid busy interval %s - %s", interval.start, interval.end)
            continue
        blocks.append(TimeInterval(start=interval.start, end=interval.end))

    free: list[TimeInterval] = []
    cursor = day_start
    for block in merge_busy(blocks):
        if cursor < block.start:
            free.append(TimeInterval(start=cursor, end=block.start))
        cursor = max(cursor, block.end)
    if cursor < day_end:
        free.append(TimeInterval(start=cursor, end=day_end))

    return [slot for slot in free if slot.is_valid and work_window.contains(slot)]


__all__ = ["free_slots_for_day", "merge_busy"]
