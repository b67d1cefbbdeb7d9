from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from autoplan.db.session import get_session
from autoplan.repositories import working_hours as working_hours_repo
from autoplan.scheduler import DaySetting
from autoplan.schemas import DaySettingSchema, WorkingHoursSchema

router = APIRouter()


@router.get("/working-hours", response_model=WorkingHoursSchema)
def get_working_hours(session: Session = Depends(get_session)) -> WorkingHoursSchema:
    profile = working_hours_repo.get_profile(session)
    return WorkingHoursSchema(days=[DaySettingSchema.model_validate(setting) for setting in profile.days])


@router.put("/working-hours", response_model=WorkingHoursSchema)
def put_working_hours(payload: WorkingHoursSchema, session: Session = Depends(get_session)) -> WorkingHoursSchema:
    days = [item.day for item in payload.days]
    if len(set(days)) != len(days):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Each weekday may appear only once")
    for item in payload.days:
        if item.is_working_day and item.start >= item.end:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Working hours for {item.day.value} must start before they end",
            )

    working_hours_repo.replace_profile(
        session,
        [DaySetting(day=item.day, is_working_day=item.is_working_day, start=item.start, end=item.end) for item in payload.days],
    )
    session.commit()
    return get_working_hours(session)
