from __future__ import annotations

from fastapi import APIRouter

from autoplan.api.v1.endpoints import bookings, health, scheduler, settings, tasks

api_router = APIRouter()
api_router.include_router(health.router, tags=["system"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(scheduler.router, prefix="/scheduler", tags=["scheduler"])
