"""Multi-criteria desirability scoring of free slots for tasks and task groups."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta

from .models import GroupSlotChoice, ScheduledBlock, SlotChoice, TaskInput, TimeInterval


TravelTimeEstimator = Callable[[str, str], int]

TIME_OF_DAY_BANDS: dict[str, tuple[int, int]] = {
    "morning": (8, 12),
    "afternoon": (12, 17),
    "evening": (17, 22),
}

_CLOCK_TAG_PATTERN = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)?$", re.IGNORECASE)


def parse_preferred_clock(tag: str) -> int | None:
    """Minutes from midnight for tags like ``3pm``, ``3:30 pm`` or ``15:00``."""

    match = _CLOCK_TAG_PATTERN.match(tag.strip())
    if match is None:
        return None
    hours = int(match.group(1))
    minutes = int(match.group(2) or 0)
    meridiem = (match.group(3) or "").lower()
    if minutes > 59:
        return None
    if meridiem:
        if not 1 <= hours <= 12:
            return None
        hours = hours % 12 + (12 if meridiem == "pm" else 0)
    elif match.group(2) is None or hours > 23:
        # A bare number is not a clock time.
        return None
    return hours * 60 + minutes


def _minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


class SlotScorer:
    """Scores candidate slots; higher is better, the first slot wins exact ties."""

    def __init__(
        self,
        *,
        travel_time_estimator: TravelTimeEstimator | None = None,
        travel_time_minutes: int = 15,
        recency_base: float = 1000.0,
        late_penalty: float = -1000.0,
        too_close_penalty: float = -500.0,
        within_12h_bonus: float = 60.0,
        within_24h_bonus: float = 40.0,
        band_bonus: float = 30.0,
        clock_bonus: float = 50.0,
        group_band_bonus: float = 20.0,
        group_clock_bonus: float = 20.0,
        clock_tolerance_minutes: int = 30,
        travel_buffer_minutes: int = 5,
        travel_comfort_minutes: int = 20,
        travel_tight_penalty: float = -40.0,
        travel_comfort_bonus: float = 25.0,
        priority_weight: float = 5.0,
        tight_fit_minutes: int = 15,
        tight_fit_bonus: float = 15.0,
        loose_fit_minutes: int = 60,
        loose_fit_penalty: float = -10.0,
        shared_location_bonus: float = 50.0,
        location_spread_penalty: float = -10.0,
    ) -> None:
        if travel_time_minutes < 0:
            raise ValueError("travel_time_minutes must be non-negative")
        self.travel_time_estimator = travel_time_estimator
        self.travel_time_minutes = travel_time_minutes
        self.recency_base = recency_base
        self.late_penalty = late_penalty
        self.too_close_penalty = too_close_penalty
        self.within_12h_bonus = within_12h_bonus
        self.within_24h_bonus = within_24h_bonus
        self.band_bonus = band_bonus
        self.clock_bonus = clock_bonus
        self.group_band_bonus = group_band_bonus
        self.group_clock_bonus = group_clock_bonus
        self.clock_tolerance_minutes = clock_tolerance_minutes
        self.travel_buffer_minutes = travel_buffer_minutes
        self.travel_comfort_minutes = travel_comfort_minutes
        self.travel_tight_penalty = travel_tight_penalty
        self.travel_comfort_bonus = travel_comfort_bonus
        self.priority_weight = priority_weight
        self.tight_fit_minutes = tight_fit_minutes
        self.tight_fit_bonus = tight_fit_bonus
        self.loose_fit_minutes = loose_fit_minutes
        self.loose_fit_penalty = loose_fit_penalty
        self.shared_location_bonus = shared_location_bonus
        self.location_spread_penalty = location_spread_penalty

    # Single task

    def score_task_slot(
        self,
        task: TaskInput,
        slot: TimeInterval,
        committed: Sequence[ScheduledBlock],
        now: datetime,
    ) -> float:
        duration = task.duration_minutes or 0
        return (
            self._recency_score(slot.start, now)
            + self._deadline_score(task.deadline, slot.start, duration)
            + self._time_of_day_score(task.preferred_times, slot.start, self.band_bonus, self.clock_bonus)
            + self._travel_score(task.location, slot.start, committed)
            + self._priority_score(task.priority)
            + self._fragmentation_score(slot, duration)
        )

    def find_best_slot_for_task(
        self,
        task: TaskInput,
        slots: Sequence[TimeInterval],
        committed: Sequence[ScheduledBlock],
        now: datetime,
    ) -> SlotChoice | None:
        duration = task.duration_minutes or 0
        best: SlotChoice | None = None
        for slot in slots:
            if slot.duration_minutes < duration:
                continue
            score = self.score_task_slot(task, slot, committed, now)
            if best is None or score > best.score:
                best = SlotChoice(start=slot.start, end=slot.start + timedelta(minutes=duration), score=score)
        return best

    # Groups

    def score_group_slot(
        self,
        tasks: Sequence[TaskInput],
        slot: TimeInterval,
        committed: Sequence[ScheduledBlock],
        now: datetime,
    ) -> float:
        total_duration = sum(task.duration_minutes or 0 for task in tasks)
        deadlines = [task.deadline for task in tasks if task.deadline is not None]
        earliest_deadline = min(deadlines) if deadlines else None
        average_priority = sum(task.priority for task in tasks) / len(tasks)
        preferred = sorted({tag for task in tasks for tag in task.preferred_times})

        return (
            self._recency_score(slot.start, now)
            + self._deadline_score(earliest_deadline, slot.start, total_duration)
            + self._time_of_day_score(preferred, slot.start, self.group_band_bonus, self.group_clock_bonus)
            + self._travel_score(_shared_location(tasks), slot.start, committed)
            + self._priority_score(average_priority)
            + self._fragmentation_score(slot, total_duration)
            + self._location_consistency_score(tasks)
        )

    def find_best_slot_for_group(
        self,
        tasks: Sequence[TaskInput],
        slots: Sequence[TimeInterval],
        committed: Sequence[ScheduledBlock],
        now: datetime,
    ) -> GroupSlotChoice | None:
        if not tasks:
            return None
        total_duration = sum(task.duration_minutes or 0 for task in tasks)
        best: GroupSlotChoice | None = None
        for slot in slots:
            if slot.duration_minutes < total_duration:
                continue
            score = self.score_group_slot(tasks, slot, committed, now)
            if best is None or score > best.score:
                best = GroupSlotChoice(
                    start=slot.start,
                    end=slot.start + timedelta(minutes=total_duration),
                    total_duration_minutes=total_duration,
                    score=score,
                )
        return best

    # Primitives

    def _recency_score(self, slot_start: datetime, now: datetime) -> float:
        return self.recency_base - _minutes_between(now, slot_start) / 60

    def _deadline_score(self, deadline: datetime | None, slot_start: datetime, duration: int) -> float:
        if deadline is None:
            return 0.0
        minutes_left = _minutes_between(slot_start, deadline)
        if minutes_left <= 0:
            return self.late_penalty
        if minutes_left < duration:
            return self.too_close_penalty
        if minutes_left < 12 * 60:
            return self.within_12h_bonus
        if minutes_left < 24 * 60:
            return self.within_24h_bonus
        return 0.0

    def _time_of_day_score(
        self,
        preferred_times: Sequence[str],
        slot_start: datetime,
        band_bonus: float,
        clock_bonus: float,
    ) -> float:
        if not preferred_times:
            return 0.0
        score = 0.0
        tags = [tag.strip().lower() for tag in preferred_times if tag and tag.strip()]

        for tag in tags:
            band = TIME_OF_DAY_BANDS.get(tag)
            if band is not None and band[0] <= slot_start.hour < band[1]:
                score += band_bonus
                break

        slot_minutes = slot_start.hour * 60 + slot_start.minute
        for tag in tags:
            if tag in TIME_OF_DAY_BANDS:
                continue
            preferred = parse_preferred_clock(tag)
            if preferred is not None and abs(slot_minutes - preferred) <= self.clock_tolerance_minutes:
                score += clock_bonus
                break
        return score

    def _travel_score(
        self,
        location: str | None,
        slot_start: datetime,
        committed: Sequence[ScheduledBlock],
    ) -> float:
        if not location:
            return 0.0
        previous_blocks = [block for block in committed if block.end <= slot_start]
        if not previous_blocks:
            return 0.0
        previous = max(previous_blocks, key=lambda block: block.end)
        if not previous.location or previous.location == location:
            return 0.0

        travel = self._estimate_travel(previous.location, location)
        gap = _minutes_between(previous.end, slot_start)
        if gap < travel + self.travel_buffer_minutes:
            return self.travel_tight_penalty
        if gap <= travel + self.travel_comfort_minutes:
            return self.travel_comfort_bonus
        return 0.0

    def _estimate_travel(self, origin: str, destination: str) -> int:
        if self.travel_time_estimator is None:
            return self.travel_time_minutes
        return self.travel_time_estimator(origin, destination)

    def _priority_score(self, priority: float) -> float:
        return (priority - 1) * self.priority_weight

    def _fragmentation_score(self, slot: TimeInterval, duration: int) -> float:
        remainder = slot.duration_minutes - duration
        if remainder < self.tight_fit_minutes:
            return self.tight_fit_bonus
        if remainder > self.loose_fit_minutes:
            return self.loose_fit_penalty
        return 0.0

    def _location_consistency_score(self, tasks: Sequence[TaskInput]) -> float:
        if _shared_location(tasks) is not None:
            return self.shared_location_bonus
        distinct = {task.location or None for task in tasks}
        return self.location_spread_penalty * (len(distinct) - 1)


def _shared_location(tasks: Sequence[TaskInput]) -> str | None:
    locations = {task.location or None for task in tasks}
    if len(locations) == 1:
        return next(iter(locations))
    return None


__all__ = ["SlotScorer", "TIME_OF_DAY_BANDS", "TravelTimeEstimator", "parse_preferred_clock"]
