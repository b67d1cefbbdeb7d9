from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from autoplan.db import models
from autoplan.scheduler.models import DaySetting, Weekday, WorkingHoursProfile


def list_entries(session: Session) -> list[models.WorkingHoursEntry]:
    return list(session.scalars(select(models.WorkingHoursEntry)))


def get_profile(session: Session) -> WorkingHoursProfile:
    """Stored weekly profile, or the Mon-Fri 09:00-17:00 default when nothing is stored."""

    entries = list_entries(session)
    if not entries:
        return WorkingHoursProfile.default()
    order = {day.value: index for index, day in enumerate(Weekday)}
    entries.sort(key=lambda entry: order.get(entry.day, len(order)))
    return WorkingHoursProfile(
        days=[
            DaySetting(
                day=Weekday(entry.day),
                is_working_day=entry.is_working_day,
                start=entry.start,
                end=entry.end,
            )
            for entry in entries
        ]
    )


def replace_profile(session: Session, days: Iterable[DaySetting]) -> list[models.WorkingHoursEntry]:
    session.execute(delete(models.WorkingHoursEntry))
    entries = [
        models.WorkingHoursEntry(
            day=Weekday(setting.day).value,
            is_working_day=setting.is_working_day,
            start=setting.start,
            end=setting.end,
        )
        for setting in days
    ]
    session.add_all(entries)
    session.flush()
    return entries
