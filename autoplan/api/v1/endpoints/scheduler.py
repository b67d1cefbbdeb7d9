from __future__ import annotations

import time
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from autoplan.core.config import get_settings
from autoplan.db.session import get_session
from autoplan.schemas import AssignmentRead, AvailabilityResponse, ScheduleRunRequest, ScheduleRunResponse, SlotRead
from autoplan.services.scheduling import SchedulingService, build_task_scheduler

router = APIRouter()

_settings = get_settings()
_scheduling_service = SchedulingService(build_task_scheduler(_settings), _settings.local_zone())


@router.post("/run", response_model=ScheduleRunResponse, status_code=status.HTTP_202_ACCEPTED)
def run_schedule(payload: ScheduleRunRequest, session: Session = Depends(get_session)) -> ScheduleRunResponse:
    start_time = time.perf_counter()
    try:
        result = _scheduling_service.run(session, horizon_days=payload.horizon_days)
    except RuntimeError as exc:  # pragma: no cover - guard for misconfigured storage
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    session.commit()
    runtime_ms = (time.perf_counter() - start_time) * 1000

    return ScheduleRunResponse(
        assignments=[
            AssignmentRead(
                task_id=assignment.task_id,
                start=_scheduling_service.to_aware(assignment.start),
                end=_scheduling_service.to_aware(assignment.end),
            )
            for assignment in result.assignments
        ],
        unscheduled_tasks=result.unscheduled_tasks,
        metrics=result.metrics.to_dict() if result.metrics else {},
        runtime_ms=runtime_ms,
    )


@router.get("/availability", response_model=AvailabilityResponse)
def get_availability(
    start: date = Query(...),
    end: date = Query(...),
    session: Session = Depends(get_session),
) -> AvailabilityResponse:
    if end < start:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="end must not be before start")
    slots = _scheduling_service.availability(session, start, end)
    return AvailabilityResponse(
        slots=[SlotRead(start=slot.start, end=slot.end, duration_minutes=slot.duration_minutes) for slot in slots],
        total_minutes=sum(slot.duration_minutes for slot in slots),
    )
