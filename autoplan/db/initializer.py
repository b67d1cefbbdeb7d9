from __future__ import annotations

from sqlalchemy import text

from autoplan.db import models  # noqa: F401  registers tables on Base.metadata
from autoplan.db.base import Base
from autoplan.db.session import engine


def create_database_schema() -> None:
    """Create core tables if they do not exist."""

    Base.metadata.create_all(bind=engine)

    if engine.dialect.name == "postgresql":
        with engine.begin() as connection:
            connection.execute(text("SET timezone TO 'UTC';"))


__all__ = ["create_database_schema"]
