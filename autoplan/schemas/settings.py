from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from autoplan.scheduler.models import Weekday


_CLOCK = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"


class DaySettingSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: Weekday
    is_working_day: bool = True
    start: str = Field(default="09:00", pattern=_CLOCK)
    end: str = Field(default="17:00", pattern=_CLOCK)


class WorkingHoursSchema(BaseModel):
    days: list[DaySettingSchema] = Field(min_length=1, max_length=7)
