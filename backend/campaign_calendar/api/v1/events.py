from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response
from sqlmodel import Session, select

from campaign_calendar.api.deps import AdminDep, CallerDep
from campaign_calendar.db import SessionDep
from campaign_calendar.models import Department, Event, User
from campaign_calendar.schemas import EventCreate, EventRead
from campaign_calendar.services.permissions import scoped_department_id

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_references(
    session: Session,
    department_id: Optional[UUID],
    assignee_id: Optional[UUID],
) -> None:
    if department_id and not session.get(Department, department_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Department not found",
        )
    if assignee_id and not session.get(User, assignee_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assignee not found",
        )


@router.get("/", response_model=List[EventRead], summary="List events")
def list_events(session: SessionDep, caller: CallerDep) -> List[EventRead]:
    """Administrators see every event, department viewers only their own."""
    department_id = scoped_department_id(caller)
    statement = select(Event).order_by(Event.date.asc(), Event.created_at.asc())
    if department_id is not None:
        statement = statement.where(Event.department_id == department_id)
    return [EventRead.model_validate(event) for event in session.exec(statement).all()]


@router.post(
    "/",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create event",
)
def create_event(payload: EventCreate, session: SessionDep, caller: AdminDep) -> EventRead:
    _check_references(session, payload.department_id, payload.assignee_id)
    event = Event(**payload.model_dump())
    session.add(event)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to create event")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create event",
        ) from None
    session.refresh(event)
    return EventRead.model_validate(event)


@router.delete(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete event",
)
def delete_event(event_id: UUID, session: SessionDep, caller: AdminDep) -> Response:
    event = session.get(Event, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    session.delete(event)
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete all events",
)
def delete_all_events(session: SessionDep, caller: AdminDep) -> Response:
    events = session.exec(select(Event)).all()
    for event in events:
        session.delete(event)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to delete events")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not delete events",
        ) from None
    logger.info(f"{caller.address} deleted all events ({len(events)} rows)")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
