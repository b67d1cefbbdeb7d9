from __future__ import annotations

import os
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["APP_TIMEZONE"] = "UTC"

from autoplan.db import models  # noqa: E402
from autoplan.db.initializer import create_database_schema  # noqa: E402
from autoplan.db.session import SessionLocal, engine  # noqa: E402
from autoplan.main import create_app  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def create_test_database() -> Generator[None, None, None]:
    create_database_schema()
    yield
    engine.dispose()


@pytest.fixture()
def session_scope() -> Generator:
    session = SessionLocal()
    try:
        yield session
        session.commit()
    finally:
        for model in (models.Task, models.Booking, models.WorkingHoursEntry):
            session.execute(delete(model))
        session.commit()
        session.close()


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
