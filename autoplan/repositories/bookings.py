from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from autoplan.core.clock import as_utc
from autoplan.db import models


def list_bookings(session: Session) -> list[models.Booking]:
    statement = select(models.Booking).order_by(models.Booking.start_time)
    return list(session.scalars(statement))


def get_booking(session: Session, booking_id: uuid.UUID) -> models.Booking | None:
    return session.get(models.Booking, booking_id)


def create_booking(
    session: Session,
    *,
    title: str,
    start_time: datetime,
    end_time: datetime,
    location: str | None = None,
) -> models.Booking:
    booking = models.Booking(
        title=title,
        start_time=as_utc(start_time),
        end_time=as_utc(end_time),
        location=location,
    )
    session.add(booking)
    session.flush()
    return booking


def delete_booking(session: Session, booking_id: uuid.UUID) -> None:
    booking = session.get(models.Booking, booking_id)
    if booking is None:
        return
    session.delete(booking)
