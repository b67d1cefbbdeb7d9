from __future__ import annotations

import logging

from fastapi import FastAPI

from autoplan.api.v1.router import api_router
from autoplan.core.config import get_settings
from autoplan.db.initializer import create_database_schema


logger = logging.getLogger(__name__)

settings = get_settings()


def create_app() -> FastAPI:
    """Construct the FastAPI application and configure routes."""

    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Autoplan Task Scheduler", version="0.1.0")
    app.include_router(api_router, prefix="/api/v1")

    @app.on_event("startup")
    def on_startup() -> None:
        logger.info("Initializing database schema")
        create_database_schema()

    return app


app = create_app()
