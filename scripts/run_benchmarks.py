from __future__ import annotations

import csv
import os
import random
import sys
import time
from datetime import datetime, timedelta
from pathlib import Path

import psutil

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from autoplan.scheduler import (  # noqa: E402
    ExistingBooking,
    ScheduleRequest,
    TaskInput,
    TaskScheduler,
    WorkingHoursProfile,
)

ITERATIONS = 200
BATCH_SIZES = (10, 25, 50)
OUTPUT = Path("benchmarks_scheduler.csv")
LOCATIONS = [None, "Office", "Home", "Gym", "Supermarket"]
CATEGORIES = ["General", "Work/Study", "Communication", "Shopping/Errands"]


def build_request(batch_size: int, now: datetime, rng: random.Random) -> ScheduleRequest:
    tasks = [
        TaskInput(
            task_id=f"task-{index}",
            duration_minutes=rng.choice([15, 30, 45, 60, 90]),
            priority=rng.randint(1, 10),
            deadline=now + timedelta(hours=rng.randint(2, 240)) if rng.random() < 0.4 else None,
            location=rng.choice(LOCATIONS),
            preferred_times=[rng.choice(["morning", "afternoon", "evening"])] if rng.random() < 0.3 else [],
            category=rng.choice(CATEGORIES),
            created_at=now - timedelta(minutes=index),
        )
        for index in range(batch_size)
    ]
    bookings = []
    for day in range(14):
        start = now.replace(hour=rng.randint(9, 15), minute=0) + timedelta(days=day)
        bookings.append(ExistingBooking(start=start, end=start + timedelta(minutes=rng.choice([30, 60, 120]))))
    return ScheduleRequest(tasks=tasks, working_hours=WorkingHoursProfile.default(), bookings=bookings, now=now)


def run_benchmark(*, iterations: int, filename: Path) -> None:
    process = psutil.Process(os.getpid())
    scheduler = TaskScheduler()
    rng = random.Random(42)
    now = datetime.now().replace(hour=8, minute=0, second=0, microsecond=0)

    rows: list[tuple[int, int, float, float, float, int]] = []
    for batch_size in BATCH_SIZES:
        for run_id in range(1, iterations + 1):
            request = build_request(batch_size, now, rng)
            cpu_before = process.cpu_times()

            started = time.perf_counter()
            result = scheduler.schedule(request)
            runtime_ms = (time.perf_counter() - started) * 1000

            cpu_after = process.cpu_times()
            cpu_time_ms = (
                (cpu_after.user + cpu_after.system)
                - (cpu_before.user + cpu_before.system)
            ) * 1000.0
            rss_mb = process.memory_info().rss / (1024 * 1024)
            rows.append((run_id, batch_size, runtime_ms, cpu_time_ms, rss_mb, len(result.unscheduled_tasks)))

    with filename.open("w", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(["run_id", "batch_size", "runtime_ms", "cpu_time_ms", "rss_mb", "unscheduled"])
        writer.writerows(rows)


def main() -> None:
    run_benchmark(iterations=ITERATIONS, filename=OUTPUT)
    print(f"Scheduler benchmark written to {OUTPUT}")


if __name__ == "__main__":
    main()
