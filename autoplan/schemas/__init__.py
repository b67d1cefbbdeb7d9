from .booking import BookingCollection, BookingCreate, BookingRead
from .schedule import AssignmentRead, AvailabilityResponse, ScheduleRunRequest, ScheduleRunResponse, SlotRead
from .settings import DaySettingSchema, WorkingHoursSchema
from .task import TaskCollection, TaskCreate, TaskRead, TaskUpdate

__all__ = [
    "AssignmentRead",
    "AvailabilityResponse",
    "BookingCollection",
    "BookingCreate",
    "BookingRead",
    "DaySettingSchema",
    "ScheduleRunRequest",
    "ScheduleRunResponse",
    "SlotRead",
    "TaskCollection",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "WorkingHoursSchema",
]
