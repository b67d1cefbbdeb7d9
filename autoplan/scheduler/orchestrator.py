from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta

from .availability import get_available_slots
from .grouping import group_tasks
from .models import (
    DEFAULT_CATEGORY,
    DEFAULT_DURATION_MINUTES,
    MAX_PRIORITY,
    MIN_PRIORITY,
    ExistingBooking,
    ScheduleAssignment,
    ScheduledBlock,
    ScheduleRequest,
    ScheduleResult,
    SchedulingMetrics,
    TaskInput,
    TimeInterval,
)
from .scoring import SlotScorer
from .working_hours import start_of_day


logger = logging.getLogger(__name__)


class TaskScheduler:
    """Greedy group-then-task placement with a full availability recompute after every commit."""

    def __init__(
        self,
        *,
        horizon_days: int = 14,
        default_duration_minutes: int = DEFAULT_DURATION_MINUTES,
        scorer: SlotScorer | None = None,
    ) -> None:
        if horizon_days < 1:
            raise ValueError("horizon_days must be at least 1")
        if default_duration_minutes < 1:
            raise ValueError("default_duration_minutes must be positive")
        self.horizon_days = horizon_days
        self.default_duration_minutes = default_duration_minutes
        self.scorer = scorer or SlotScorer()

    def window(self, now: datetime) -> tuple[datetime, datetime]:
        """First and last calendar day (as midnights) of the planning horizon."""

        first_day = start_of_day(now)
        return first_day, first_day + timedelta(days=self.horizon_days - 1)

    def schedule(self, request: ScheduleRequest) -> ScheduleResult:
        now = _ceil_to_minute(request.now or datetime.now())
        tasks = sorted((self._normalize(task) for task in request.tasks), key=_sort_key)
        if not tasks:
            return ScheduleResult(assignments=[], unscheduled_tasks=[], metrics=_build_metrics([], [], {}, 0))

        first_day, last_day = self.window(now)
        profile = request.working_hours
        base_busy = list(request.bookings)
        if now > first_day:
            base_busy.append(ExistingBooking(start=first_day, end=now))

        grouping = group_tasks(tasks)
        committed: list[ScheduledBlock] = []
        assignments: list[ScheduleAssignment] = []
        scheduled_ids: set[str] = set()
        remaining = list(grouping.remaining_tasks)
        grouped_count = 0

        def recompute() -> list[TimeInterval]:
            busy = base_busy + [ExistingBooking(start=block.start, end=block.end) for block in committed]
            return get_available_slots(first_day, last_day, profile, busy)

        availability = recompute()

        for group_id, members in grouping.groups.items():
            pending = [task for task in members if task.task_id not in scheduled_ids]
            if not pending:
                continue

            choice = self.scorer.find_best_slot_for_group(pending, availability, committed, now)
            if choice is None:
                logger.info("No slot fits group %s (%d tasks), falling back to individual placement", group_id, len(pending))
                remaining.extend(pending)
            else:
                cursor = choice.start
                for task in pending:
                    end = cursor + timedelta(minutes=task.duration_minutes)
                    assignments.append(ScheduleAssignment(task_id=task.task_id, start=cursor, end=end))
                    committed.append(ScheduledBlock(task_id=task.task_id, start=cursor, end=end, location=task.location))
                    scheduled_ids.add(task.task_id)
                    cursor = end
                grouped_count += len(pending)
                logger.info("Placed group %s at %s - %s", group_id, choice.start, choice.end)
            availability = recompute()

        order = {task.task_id: index for index, task in enumerate(tasks)}
        queued: dict[str, TaskInput] = {}
        for task in remaining:
            queued.setdefault(task.task_id, task)

        for task in sorted(queued.values(), key=lambda item: order[item.task_id]):
            if task.task_id in scheduled_ids:
                continue
            choice = self.scorer.find_best_slot_for_task(task, availability, committed, now)
            if choice is None:
                logger.info("Task %s (%d min) could not be scheduled", task.task_id, task.duration_minutes)
                continue
            assignments.append(ScheduleAssignment(task_id=task.task_id, start=choice.start, end=choice.end))
            committed.append(
                ScheduledBlock(task_id=task.task_id, start=choice.start, end=choice.end, location=task.location)
            )
            scheduled_ids.add(task.task_id)
            availability = recompute()

        unscheduled = [task.task_id for task in tasks if task.task_id not in scheduled_ids]
        metrics = _build_metrics(assignments, unscheduled, {task.task_id: task for task in tasks}, grouped_count)
        logger.debug("Scheduling run finished: %s", metrics.to_dict())
        return ScheduleResult(assignments=assignments, unscheduled_tasks=unscheduled, metrics=metrics)

    def _normalize(self, task: TaskInput) -> TaskInput:
        changes: dict[str, object] = {}
        if task.duration_minutes is None or task.duration_minutes <= 0:
            logger.warning(
                "Task %s has invalid duration %r, defaulting to %d minutes",
                task.task_id,
                task.duration_minutes,
                self.default_duration_minutes,
            )
            changes["duration_minutes"] = self.default_duration_minutes
        if not MIN_PRIORITY <= task.priority <= MAX_PRIORITY:
            changes["priority"] = min(MAX_PRIORITY, max(MIN_PRIORITY, task.priority))
        if not task.category:
            changes["category"] = DEFAULT_CATEGORY
        return replace(task, **changes) if changes else task


def _sort_key(task: TaskInput) -> tuple:
    return (
        -task.priority,
        task.deadline is None,
        task.deadline or datetime.max,
        task.created_at is None,
        task.created_at or datetime.min,
    )


def _ceil_to_minute(value: datetime) -> datetime:
    truncated = value.replace(second=0, microsecond=0)
    if truncated < value:
        truncated += timedelta(minutes=1)
    return truncated


def _build_metrics(
    assignments: list[ScheduleAssignment],
    unscheduled: list[str],
    tasks_by_id: dict[str, TaskInput],
    grouped_count: int,
) -> SchedulingMetrics:
    late_count = 0
    total_tardiness = 0
    for assignment in assignments:
        deadline = tasks_by_id[assignment.task_id].deadline
        if deadline is not None and assignment.end > deadline:
            late_count += 1
            total_tardiness += int((assignment.end - deadline).total_seconds() // 60)
    return SchedulingMetrics(
        scheduled_count=len(assignments),
        unscheduled_count=len(unscheduled),
        grouped_count=grouped_count,
        late_count=late_count,
        total_tardiness_minutes=total_tardiness,
    )


__all__ = ["TaskScheduler"]
