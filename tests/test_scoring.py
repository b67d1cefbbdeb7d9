from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from autoplan.scheduler.models import ScheduledBlock, TaskInput, TimeInterval
from autoplan.scheduler.scoring import SlotScorer, parse_preferred_clock

NOW = datetime(2025, 1, 6, 8, 0)


def _dt(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, day, hour, minute)


def _slot(day: int, start: tuple[int, int], end: tuple[int, int]) -> TimeInterval:
    return TimeInterval(start=_dt(day, *start), end=_dt(day, *end))


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("3pm", 900),
        ("3:30 pm", 930),
        ("3:30PM", 930),
        ("15:00", 900),
        ("9am", 540),
        ("12am", 0),
        ("12pm", 720),
        ("3", None),
        ("13pm", None),
        ("10:75", None),
        ("morning", None),
    ],
)
def test_parse_preferred_clock(tag, expected) -> None:
    assert parse_preferred_clock(tag) == expected


@pytest.mark.parametrize(
    ("deadline", "adjustment"),
    [
        (_dt(6, 8, 30), -1000),
        (_dt(6, 9), -1000),
        (_dt(6, 9, 30), -500),
        (_dt(6, 15), 60),
        (_dt(7, 8), 40),
        (_dt(8, 9), 0),
    ],
)
def test_deadline_pressure(deadline, adjustment) -> None:
    scorer = SlotScorer()
    task = TaskInput(task_id="t", duration_minutes=60)
    slot = _slot(6, (9, 0), (10, 0))

    base = scorer.score_task_slot(task, slot, [], NOW)
    score = scorer.score_task_slot(replace(task, deadline=deadline), slot, [], NOW)

    assert score - base == pytest.approx(adjustment)


def test_recency_prefers_earlier_slots() -> None:
    scorer = SlotScorer()
    task = TaskInput(task_id="t", duration_minutes=60)

    monday = scorer.score_task_slot(task, _slot(6, (9, 0), (10, 0)), [], NOW)
    tuesday = scorer.score_task_slot(task, _slot(7, (9, 0), (10, 0)), [], NOW)

    assert monday - tuesday == pytest.approx(24)
    assert monday == pytest.approx(1000 - 1 + 10 + 15)


@pytest.mark.parametrize(
    ("preferred", "adjustment"),
    [
        (["morning"], 30),
        (["MORNING"], 30),
        (["afternoon"], 0),
        (["evening", "morning"], 30),
        (["morning", "9:15am"], 80),
        (["8:30 am"], 50),
        (["9:45"], 0),
        (["whenever"], 0),
    ],
)
def test_time_of_day_preference(preferred, adjustment) -> None:
    scorer = SlotScorer()
    task = TaskInput(task_id="t", duration_minutes=60)
    slot = _slot(6, (9, 0), (10, 0))

    base = scorer.score_task_slot(task, slot, [], NOW)
    score = scorer.score_task_slot(replace(task, preferred_times=preferred), slot, [], NOW)

    assert score - base == pytest.approx(adjustment)


@pytest.mark.parametrize(
    ("slot_start", "adjustment"),
    [
        ((10, 0), -40),
        ((10, 19), -40),
        ((10, 25), 25),
        ((10, 35), 25),
        ((10, 36), 0),
    ],
)
def test_travel_feasibility(slot_start, adjustment) -> None:
    scorer = SlotScorer()
    task = TaskInput(task_id="t", duration_minutes=30, location="Home")
    committed = [ScheduledBlock(task_id="prev", start=_dt(6, 9), end=_dt(6, 10), location="Office")]
    hour, minute = slot_start
    slot = TimeInterval(start=_dt(6, hour, minute), end=_dt(6, hour + 1, minute))

    base = scorer.score_task_slot(task, slot, [], NOW)
    score = scorer.score_task_slot(task, slot, committed, NOW)

    assert score - base == pytest.approx(adjustment)


def test_travel_ignored_for_same_or_missing_location() -> None:
    scorer = SlotScorer()
    slot = _slot(6, (10, 0), (11, 0))
    committed = [ScheduledBlock(task_id="prev", start=_dt(6, 9), end=_dt(6, 10), location="Office")]

    for task in (
        TaskInput(task_id="same", duration_minutes=30, location="Office"),
        TaskInput(task_id="none", duration_minutes=30),
    ):
        assert scorer.score_task_slot(task, slot, committed, NOW) == scorer.score_task_slot(task, slot, [], NOW)


def test_travel_uses_latest_preceding_block_and_estimator() -> None:
    scorer = SlotScorer(travel_time_estimator=lambda origin, destination: 60)
    task = TaskInput(task_id="t", duration_minutes=30, location="Home")
    committed = [
        ScheduledBlock(task_id="early", start=_dt(6, 9), end=_dt(6, 9, 30), location="Office"),
        ScheduledBlock(task_id="later", start=_dt(6, 9, 30), end=_dt(6, 10), location="Gym"),
        ScheduledBlock(task_id="after", start=_dt(6, 12), end=_dt(6, 13), location="Home"),
    ]
    slot = _slot(6, (10, 25), (11, 25))

    base = scorer.score_task_slot(task, slot, [], NOW)

    assert scorer.score_task_slot(task, slot, committed, NOW) - base == pytest.approx(-40)


def test_priority_bonus() -> None:
    scorer = SlotScorer()
    slot = _slot(6, (9, 0), (10, 0))
    low = scorer.score_task_slot(TaskInput(task_id="l", duration_minutes=60, priority=1), slot, [], NOW)
    high = scorer.score_task_slot(TaskInput(task_id="h", duration_minutes=60, priority=10), slot, [], NOW)

    assert high - low == pytest.approx(45)


def test_fragmentation() -> None:
    scorer = SlotScorer()
    task = TaskInput(task_id="t", duration_minutes=60)

    tight = scorer.score_task_slot(task, _slot(6, (9, 0), (10, 10)), [], NOW)
    moderate = scorer.score_task_slot(task, _slot(6, (9, 0), (10, 40)), [], NOW)
    loose = scorer.score_task_slot(task, _slot(6, (9, 0), (12, 20)), [], NOW)

    assert tight - moderate == pytest.approx(15)
    assert loose - moderate == pytest.approx(-10)


def test_best_slot_is_truncated_to_duration() -> None:
    scorer = SlotScorer()
    task = TaskInput(task_id="t", duration_minutes=45)

    choice = scorer.find_best_slot_for_task(task, [_slot(6, (9, 0), (17, 0))], [], NOW)

    assert choice is not None
    assert (choice.start, choice.end) == (_dt(6, 9), _dt(6, 9, 45))


def test_best_slot_skips_short_slots() -> None:
    scorer = SlotScorer()
    task = TaskInput(task_id="t", duration_minutes=90)
    slots = [_slot(6, (9, 0), (10, 0)), _slot(6, (14, 0), (17, 0))]

    choice = scorer.find_best_slot_for_task(task, slots, [], NOW)

    assert choice is not None
    assert choice.start == _dt(6, 14)
    assert scorer.find_best_slot_for_task(replace(task, duration_minutes=600), slots, [], NOW) is None


def test_preference_can_outweigh_recency() -> None:
    scorer = SlotScorer()
    task = TaskInput(task_id="t", duration_minutes=60, preferred_times=["afternoon"])
    slots = [_slot(6, (9, 0), (10, 0)), _slot(6, (13, 0), (14, 0))]

    choice = scorer.find_best_slot_for_task(task, slots, [], NOW)

    assert choice is not None
    assert choice.start == _dt(6, 13)


def test_missed_deadline_still_gets_a_slot() -> None:
    scorer = SlotScorer()
    task = TaskInput(task_id="t", duration_minutes=60, deadline=_dt(6, 8, 30))
    slots = [_slot(6, (9, 0), (10, 0)), _slot(7, (9, 0), (10, 0))]

    choice = scorer.find_best_slot_for_task(task, slots, [], NOW)

    assert choice is not None
    assert choice.start == _dt(6, 9)


def test_group_slot_covers_total_duration() -> None:
    scorer = SlotScorer()
    tasks = [TaskInput(task_id=name, duration_minutes=30, location="Office") for name in "abc"]
    slots = [_slot(6, (9, 0), (10, 0)), _slot(6, (13, 0), (17, 0))]

    choice = scorer.find_best_slot_for_group(tasks, slots, [], NOW)

    assert choice is not None
    assert choice.start == _dt(6, 13)
    assert choice.end == _dt(6, 14, 30)
    assert choice.total_duration_minutes == 90


def test_group_without_fitting_slot() -> None:
    scorer = SlotScorer()
    tasks = [TaskInput(task_id=name, duration_minutes=300) for name in "ab"]

    assert scorer.find_best_slot_for_group(tasks, [_slot(6, (9, 0), (17, 0))], [], NOW) is None
    assert scorer.find_best_slot_for_group([], [_slot(6, (9, 0), (17, 0))], [], NOW) is None


def test_group_location_consistency() -> None:
    scorer = SlotScorer()
    slot = _slot(6, (13, 0), (17, 0))
    shared = [TaskInput(task_id=name, duration_minutes=30, location="Office") for name in "abc"]
    spread = [
        TaskInput(task_id="a", duration_minutes=30, location="Office"),
        TaskInput(task_id="b", duration_minutes=30, location="Home"),
        TaskInput(task_id="c", duration_minutes=30),
    ]
    pair = spread[:2] + [replace(spread[2], location="Office")]

    shared_score = scorer.score_group_slot(shared, slot, [], NOW)

    assert shared_score - scorer.score_group_slot(spread, slot, [], NOW) == pytest.approx(70)
    assert shared_score - scorer.score_group_slot(pair, slot, [], NOW) == pytest.approx(60)


def test_group_uses_average_priority() -> None:
    scorer = SlotScorer()
    slot = _slot(6, (13, 0), (17, 0))
    mixed = [TaskInput(task_id="a", priority=2), TaskInput(task_id="b", priority=4)]
    flat = [TaskInput(task_id="a", priority=3), TaskInput(task_id="b", priority=3)]

    assert scorer.score_group_slot(mixed, slot, [], NOW) == pytest.approx(scorer.score_group_slot(flat, slot, [], NOW))


def test_group_uses_earliest_deadline() -> None:
    scorer = SlotScorer()
    slot = _slot(6, (9, 0), (12, 0))
    tasks = [
        TaskInput(task_id="a", duration_minutes=30, location="Office"),
        TaskInput(task_id="b", duration_minutes=30, location="Office"),
    ]
    with_deadlines = [replace(tasks[0], deadline=_dt(8, 9)), replace(tasks[1], deadline=_dt(6, 9, 30))]

    base = scorer.score_group_slot(tasks, slot, [], NOW)

    assert scorer.score_group_slot(with_deadlines, slot, [], NOW) - base == pytest.approx(-500)


def test_group_time_of_day_bonus_is_reduced() -> None:
    scorer = SlotScorer()
    slot = _slot(6, (9, 0), (12, 0))
    tasks = [TaskInput(task_id="a", location="Office"), TaskInput(task_id="b", location="Office")]
    preferring = [replace(tasks[0], preferred_times=["morning"]), replace(tasks[1], preferred_times=["9am"])]

    base = scorer.score_group_slot(tasks, slot, [], NOW)

    assert scorer.score_group_slot(preferring, slot, [], NOW) - base == pytest.approx(40)
