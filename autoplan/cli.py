from __future__ import annotations

import logging
from datetime import timedelta

from autoplan.core.config import get_settings
from autoplan.db.initializer import create_database_schema
from autoplan.db.session import SessionLocal
from autoplan.repositories import tasks as tasks_repo
from autoplan.services.scheduling import SchedulingService, build_task_scheduler


DEMO_TASKS = [
    {"title": "Buy groceries", "duration_minutes": 45, "location": "Supermarket", "category": "Shopping/Errands"},
    {"title": "Pick up parcel", "duration_minutes": 15, "location": "Supermarket", "category": "Shopping/Errands"},
    {"title": "Write quarterly report", "duration_minutes": 120, "priority": 7, "category": "Work/Study"},
    {"title": "Call the dentist", "duration_minutes": 15, "preferred_times": ["morning"], "category": "Communication"},
    {"title": "Prepare slides", "duration_minutes": 60, "priority": 5, "location": "Office", "category": "Work/Study"},
]


def seed_demo_tasks(session, deadline_days: int = 2) -> None:
    settings = get_settings()
    service = SchedulingService(build_task_scheduler(settings), settings.local_zone())
    deadline = service.to_aware(service.local_now() + timedelta(days=deadline_days))
    for index, payload in enumerate(DEMO_TASKS):
        tasks_repo.create_task(session, deadline=deadline if index % 2 == 0 else None, **payload)


def run_once() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    service = SchedulingService(build_task_scheduler(settings), settings.local_zone())

    with SessionLocal() as session:
        seed_demo_tasks(session)
        result = service.run(session)
        session.commit()

    for assignment in result.assignments:
        print(f"{assignment.task_id}: {assignment.start:%a %Y-%m-%d %H:%M} - {assignment.end:%H:%M}")
    if result.unscheduled_tasks:
        print(f"Unscheduled: {', '.join(result.unscheduled_tasks)}")
    if result.metrics is not None:
        print(result.metrics.to_dict())


if __name__ == "__main__":
    create_database_schema()
    run_once()
