from __future__ import annotations

from collections.abc import Sequence

from .models import GroupingResult, TaskInput


NO_LOCATION = "no_location"


def group_tasks(tasks: Sequence[TaskInput]) -> GroupingResult:
    """Partition a batch into location groups, deadline-day groups and the leftovers.

    A task may sit in both a location group and a deadline group; callers that
    place groups are expected to skip members they already scheduled.
    """

    if len(tasks) <= 1:
        return GroupingResult(groups={}, remaining_tasks=list(tasks))

    by_location: dict[str, list[TaskInput]] = {}
    for task in tasks:
        by_location.setdefault(task.location or NO_LOCATION, []).append(task)

    groups: dict[str, list[TaskInput]] = {}
    for location, members in by_location.items():
        if len(members) > 1:
            by_category: dict[str, list[TaskInput]] = {}
            for task in members:
                by_category.setdefault(task.category, []).append(task)
            members = [task for bucket in by_category.values() for task in bucket]
        groups[f"location:{location}"] = members

    by_deadline_day: dict[str, list[TaskInput]] = {}
    for task in tasks:
        if task.deadline is not None:
            by_deadline_day.setdefault(task.deadline.date().isoformat(), []).append(task)
    for day, members in by_deadline_day.items():
        if len(members) >= 2:
            groups[f"deadline:{day}"] = members

    grouped_ids = {task.task_id for members in groups.values() for task in members}
    remaining = [task for task in tasks if task.task_id not in grouped_ids]
    return GroupingResult(groups=groups, remaining_tasks=remaining)


__all__ = ["NO_LOCATION", "group_tasks"]
