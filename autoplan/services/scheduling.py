from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, tzinfo

from sqlalchemy.orm import Session

from autoplan.core.clock import as_utc
from autoplan.core.config import Settings
from autoplan.db import models
from autoplan.repositories import bookings as bookings_repo
from autoplan.repositories import tasks as tasks_repo
from autoplan.repositories import working_hours as working_hours_repo
from autoplan.scheduler import (
    ExistingBooking,
    ScheduleRequest,
    ScheduleResult,
    SlotScorer,
    TaskInput,
    TaskScheduler,
    TimeInterval,
    get_available_slots,
)


logger = logging.getLogger(__name__)


def build_task_scheduler(settings: Settings) -> TaskScheduler:
    return TaskScheduler(
        horizon_days=settings.scheduling_horizon_days,
        default_duration_minutes=settings.default_task_duration_minutes,
        scorer=SlotScorer(travel_time_minutes=settings.travel_time_minutes),
    )


class SchedulingService:
    """Loads scheduler inputs from storage, runs the engine and writes assignments back."""

    def __init__(self, task_scheduler: TaskScheduler, zone: tzinfo) -> None:
        self.task_scheduler = task_scheduler
        self.zone = zone

    def run(
        self,
        session: Session,
        *,
        now: datetime | None = None,
        horizon_days: int | None = None,
    ) -> ScheduleResult:
        pending = tasks_repo.list_unscheduled_tasks(session)
        profile = working_hours_repo.get_profile(session)
        request = ScheduleRequest(
            tasks=[self._to_task_input(task) for task in pending],
            working_hours=profile,
            bookings=self._existing_bookings(session),
            now=self._to_local(now) if now is not None else self.local_now(),
        )

        scheduler = self.task_scheduler
        if horizon_days is not None and horizon_days != scheduler.horizon_days:
            scheduler = TaskScheduler(
                horizon_days=horizon_days,
                default_duration_minutes=scheduler.default_duration_minutes,
                scorer=scheduler.scorer,
            )

        result = scheduler.schedule(request)
        tasks_repo.apply_assignments(
            session,
            [
                (uuid.UUID(assignment.task_id), self.to_aware(assignment.start), self.to_aware(assignment.end))
                for assignment in result.assignments
            ],
        )
        if result.unscheduled_tasks:
            logger.info("%d task(s) left unscheduled", len(result.unscheduled_tasks))
        return result

    def availability(self, session: Session, start_date: date, end_date: date) -> list[TimeInterval]:
        profile = working_hours_repo.get_profile(session)
        slots = get_available_slots(start_date, end_date, profile, self._existing_bookings(session))
        return [TimeInterval(start=self.to_aware(slot.start), end=self.to_aware(slot.end)) for slot in slots]

    def _existing_bookings(self, session: Session) -> list[ExistingBooking]:
        existing = [
            ExistingBooking(
                start=self._to_local(booking.start_time),
                end=self._to_local(booking.end_time),
                location=booking.location,
            )
            for booking in bookings_repo.list_bookings(session)
        ]
        for task in tasks_repo.list_scheduled_tasks(session):
            if task.scheduled_end is None:
                continue
            existing.append(
                ExistingBooking(
                    start=self._to_local(task.scheduled_start),
                    end=self._to_local(task.scheduled_end),
                    location=task.location,
                )
            )
        return existing

    def _to_task_input(self, task: models.Task) -> TaskInput:
        return TaskInput(
            task_id=str(task.id),
            duration_minutes=task.duration_minutes,
            priority=task.priority,
            deadline=self._to_local(task.deadline) if task.deadline is not None else None,
            location=task.location,
            preferred_times=list(task.preferred_times or []),
            category=task.category or "General",
            created_at=self._to_local(task.created_at) if task.created_at is not None else None,
        )

    def local_now(self) -> datetime:
        return datetime.now(self.zone).replace(tzinfo=None)

    def _to_local(self, dt: datetime) -> datetime:
        # Naive values (SQLite) were stored as UTC.
        return as_utc(dt).astimezone(self.zone).replace(tzinfo=None)

    def to_aware(self, dt: datetime) -> datetime:
        return dt.replace(tzinfo=self.zone)


__all__ = ["SchedulingService", "build_task_scheduler"]
