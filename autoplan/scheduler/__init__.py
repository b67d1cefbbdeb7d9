from .availability import get_available_slots
from .grouping import group_tasks
from .models import (
    DaySetting,
    ExistingBooking,
    ScheduleAssignment,
    ScheduleRequest,
    ScheduleResult,
    TaskInput,
    TimeInterval,
    Weekday,
    WorkingHoursProfile,
)
from .orchestrator import TaskScheduler
from .scoring import SlotScorer

__all__ = [
    "DaySetting",
    "ExistingBooking",
    "ScheduleAssignment",
    "ScheduleRequest",
    "ScheduleResult",
    "SlotScorer",
    "TaskInput",
    "TaskScheduler",
    "TimeInterval",
    "Weekday",
    "WorkingHoursProfile",
    "get_available_slots",
    "group_tasks",
]
