from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from autoplan.core.clock import as_utc
from autoplan.db import models


def list_tasks(session: Session) -> list[models.Task]:
    statement = select(models.Task).order_by(models.Task.created_at.desc())
    return list(session.scalars(statement))


def get_task(session: Session, task_id: uuid.UUID) -> models.Task | None:
    return session.get(models.Task, task_id)


def list_unscheduled_tasks(session: Session) -> list[models.Task]:
    statement = (
        select(models.Task)
        .where(models.Task.completed.is_(False), models.Task.scheduled_start.is_(None))
        .order_by(models.Task.created_at)
    )
    return list(session.scalars(statement))


def list_scheduled_tasks(session: Session) -> list[models.Task]:
    statement = (
        select(models.Task)
        .where(models.Task.completed.is_(False), models.Task.scheduled_start.is_not(None))
        .order_by(models.Task.scheduled_start)
    )
    return list(session.scalars(statement))


def create_task(
    session: Session,
    *,
    title: str,
    duration_minutes: int = 30,
    priority: int = 3,
    description: str | None = None,
    deadline: datetime | None = None,
    location: str | None = None,
    category: str = "General",
    preferred_times: list[str] | None = None,
) -> models.Task:
    task = models.Task(
        title=title,
        description=description,
        duration_minutes=duration_minutes,
        priority=priority,
        deadline=as_utc(deadline) if deadline is not None else None,
        location=location,
        category=category,
        preferred_times=preferred_times,
    )
    session.add(task)
    session.flush()
    return task


def update_task(session: Session, task: models.Task, **changes) -> models.Task:
    for field, value in changes.items():
        if isinstance(value, datetime):
            value = as_utc(value)
        setattr(task, field, value)
    session.add(task)
    session.flush()
    return task


def apply_assignments(
    session: Session,
    assignments: Iterable[tuple[uuid.UUID, datetime, datetime]],
) -> list[models.Task]:
    updated: list[models.Task] = []
    for task_id, start, end in assignments:
        task = session.get(models.Task, task_id)
        if task is None:
            continue
        task.scheduled_start = as_utc(start)
        task.scheduled_end = as_utc(end)
        session.add(task)
        updated.append(task)
    session.flush()
    return updated


def delete_task(session: Session, task_id: uuid.UUID) -> None:
    task = session.get(models.Task, task_id)
    if task is None:
        return
    session.delete(task)
