from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from autoplan.core.clock import as_utc


class BookingBase(BaseModel):
    title: str
    start_time: datetime
    end_time: datetime
    location: str | None = None


class BookingCreate(BookingBase):
    @model_validator(mode="after")
    def check_order(self) -> BookingCreate:
        if as_utc(self.end_time) <= as_utc(self.start_time):
            raise ValueError("end_time must be after start_time")
        return self


class BookingRead(BookingBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime

    @field_validator("start_time", "end_time", "created_at", "updated_at")
    @classmethod
    def stored_as_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class BookingCollection(BaseModel):
    items: list[BookingRead]
