from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 30
DEFAULT_PRIORITY = 3
DEFAULT_CATEGORY = "General"
MIN_PRIORITY = 1
MAX_PRIORITY = 10


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def for_date(cls, value) -> Weekday:
        # date.weekday(): Monday == 0
        return list(cls)[value.weekday()]


@dataclass(slots=True)
class DaySetting:
    day: Weekday
    is_working_day: bool = True
    start: str = "09:00"
    end: str = "17:00"


@dataclass(slots=True)
class WorkingHoursProfile:
    """Weekly working-hours template, one entry per weekday."""

    days: list[DaySetting]

    def __post_init__(self) -> None:
        seen: set[Weekday] = set()
        for setting in self.days:
            day = Weekday(setting.day)
            if day in seen:
                logger.warning("Working hours define more than one entry for %s, using the first", day.value)
            seen.add(day)

    def setting_for(self, day: Weekday) -> DaySetting | None:
        return next((setting for setting in self.days if Weekday(setting.day) is day), None)

    @classmethod
    def default(cls) -> WorkingHoursProfile:
        weekend = {Weekday.SATURDAY, Weekday.SUNDAY}
        return cls(days=[DaySetting(day=day, is_working_day=day not in weekend) for day in Weekday])


@dataclass(slots=True)
class TimeInterval:
    start: datetime
    end: datetime

    @property
    def is_valid(self) -> bool:
        return self.start < self.end

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def overlaps(self, other: TimeInterval) -> bool:
        return self.start < other.end and other.start < self.end

    def contains(self, other: TimeInterval) -> bool:
        return self.start <= other.start and other.end <= self.end


@dataclass(slots=True)
class TaskInput:
    task_id: str
    duration_minutes: int | None = DEFAULT_DURATION_MINUTES
    priority: int = DEFAULT_PRIORITY
    deadline: datetime | None = None
    location: str | None = None
    preferred_times: list[str] = field(default_factory=list)
    category: str = DEFAULT_CATEGORY
    created_at: datetime | None = None


@dataclass(slots=True)
class ExistingBooking:
    start: datetime
    end: datetime
    location: str | None = None


@dataclass(slots=True)
class ScheduledBlock:
    """Interval committed during the current scheduling run."""

    task_id: str
    start: datetime
    end: datetime
    location: str | None = None


@dataclass(slots=True)
class ScheduleAssignment:
    task_id: str
    start: datetime
    end: datetime


@dataclass(slots=True)
class SlotChoice:
    start: datetime
    end: datetime
    score: float


@dataclass(slots=True)
class GroupSlotChoice:
    start: datetime
    end: datetime
    total_duration_minutes: int
    score: float


@dataclass(slots=True)
class GroupingResult:
    groups: dict[str, list[TaskInput]]
    remaining_tasks: list[TaskInput]


@dataclass(slots=True)
class ScheduleRequest:
    tasks: list[TaskInput]
    working_hours: WorkingHoursProfile
    bookings: list[ExistingBooking] = field(default_factory=list)
    now: datetime | None = None


@dataclass(slots=True)
class SchedulingMetrics:
    scheduled_count: int
    unscheduled_count: int
    grouped_count: int
    late_count: int
    total_tardiness_minutes: int

    def to_dict(self) -> dict[str, int]:
        return {
            "scheduled_count": self.scheduled_count,
            "unscheduled_count": self.unscheduled_count,
            "grouped_count": self.grouped_count,
            "late_count": self.late_count,
            "total_tardiness_minutes": self.total_tardiness_minutes,
        }


@dataclass(slots=True)
class ScheduleResult:
    assignments: list[ScheduleAssignment]
    unscheduled_tasks: list[str]
    metrics: SchedulingMetrics | None = None


__all__ = [
    "DaySetting",
    "ExistingBooking",
    "GroupSlotChoice",
    "GroupingResult",
    "ScheduleAssignment",
    "ScheduleRequest",
    "ScheduleResult",
    "ScheduledBlock",
    "SchedulingMetrics",
    "SlotChoice",
    "TaskInput",
    "TimeInterval",
    "Weekday",
    "WorkingHoursProfile",
]
