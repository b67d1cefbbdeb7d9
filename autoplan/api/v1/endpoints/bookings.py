from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from autoplan.db.session import get_session
from autoplan.repositories import bookings as bookings_repo
from autoplan.schemas import BookingCollection, BookingCreate, BookingRead

router = APIRouter()


@router.get("/", response_model=BookingCollection)
def list_bookings(session: Session = Depends(get_session)) -> BookingCollection:
    items = bookings_repo.list_bookings(session)
    return BookingCollection(items=[BookingRead.model_validate(booking) for booking in items])


@router.post("/", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(payload: BookingCreate, session: Session = Depends(get_session)) -> BookingRead:
    booking = bookings_repo.create_booking(
        session,
        title=payload.title,
        start_time=payload.start_time,
        end_time=payload.end_time,
        location=payload.location,
    )
    session.commit()
    session.refresh(booking)
    return BookingRead.model_validate(booking)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_booking(booking_id: uuid.UUID, session: Session = Depends(get_session)) -> Response:
    if bookings_repo.get_booking(session, booking_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    bookings_repo.delete_booking(session, booking_id)
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
