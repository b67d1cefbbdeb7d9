from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ScheduleRunRequest(BaseModel):
    horizon_days: int | None = Field(default=None, ge=1, le=90)


class AssignmentRead(BaseModel):
    task_id: str
    start: datetime
    end: datetime


class ScheduleRunResponse(BaseModel):
    assignments: list[AssignmentRead]
    unscheduled_tasks: list[str]
    metrics: dict
    runtime_ms: float | None = None


class SlotRead(BaseModel):
    start: datetime
    end: datetime
    duration_minutes: int


class AvailabilityResponse(BaseModel):
    slots: list[SlotRead]
    total_minutes: int
