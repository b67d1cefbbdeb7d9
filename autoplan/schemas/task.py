from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from autoplan.core.clock import as_utc


class TaskBase(BaseModel):
    title: str
    description: str | None = None
    duration_minutes: int = Field(default=30, gt=0)
    priority: int = Field(default=3, ge=1, le=10)
    deadline: datetime | None = None
    location: str | None = None
    category: str = "General"
    preferred_times: list[str] = Field(default_factory=list)


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    completed: bool | None = None
    duration_minutes: int | None = Field(default=None, gt=0)
    priority: int | None = Field(default=None, ge=1, le=10)
    deadline: datetime | None = None
    location: str | None = None
    category: str | None = None
    preferred_times: list[str] | None = None
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None

    @field_validator("title", "completed", "duration_minutes", "priority", "category")
    @classmethod
    def reject_null(cls, value):
        # Omit the field to leave it unchanged; these columns cannot be cleared.
        if value is None:
            raise ValueError("may not be null")
        return value

    @model_validator(mode="after")
    def check_schedule(self) -> TaskUpdate:
        sent = {"scheduled_start", "scheduled_end"} & self.model_fields_set
        if not sent:
            return self
        if len(sent) == 1:
            raise ValueError("scheduled_start and scheduled_end must be updated together")
        if (self.scheduled_start is None) != (self.scheduled_end is None):
            raise ValueError("scheduled_start and scheduled_end must both be set or both be cleared")
        if self.scheduled_start is not None and as_utc(self.scheduled_end) <= as_utc(self.scheduled_start):
            raise ValueError("scheduled_end must be after scheduled_start")
        return self


class TaskRead(TaskBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    completed: bool
    preferred_times: list[str] | None = None
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("deadline", "scheduled_start", "scheduled_end", "created_at", "updated_at")
    @classmethod
    def stored_as_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None


class TaskCollection(BaseModel):
    items: list[TaskRead]
