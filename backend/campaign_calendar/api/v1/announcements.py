from __future__ import annotations

import logging
from datetime import datetime
from typing import List
from uuid import UUID
from zoneinfo import ZoneInfo

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from campaign_calendar.api.deps import AdminDep, CallerDep
from campaign_calendar.core.config import settings
from campaign_calendar.db import SessionDep
from campaign_calendar.models import Announcement, AnnouncementAcknowledgment
from campaign_calendar.schemas import AcknowledgeResponse, AnnouncementCreate, AnnouncementRead
from campaign_calendar.services.announcements import is_unread, mark_read, pending_acknowledgments

logger = logging.getLogger(__name__)

router = APIRouter()


def _now() -> datetime:
    return datetime.now(ZoneInfo(settings.DISPLAY_TIMEZONE))


def _load_announcements(session: Session) -> List[AnnouncementRead]:
    announcements = session.exec(
        select(Announcement).order_by(Announcement.created_at.desc())
    ).all()
    acknowledgments = session.exec(select(AnnouncementAcknowledgment)).all()

    read_by: dict[UUID, list[str]] = {}
    for ack in acknowledgments:
        read_by.setdefault(ack.announcement_id, []).append(ack.viewer_id)

    return [
        AnnouncementRead(
            id=item.id,
            title=item.title,
            body=item.body,
            created_at=item.created_at,
            read_by=sorted(read_by.get(item.id, [])),
        )
        for item in announcements
    ]


def _acknowledge(session: Session, announcement: AnnouncementRead, viewer_id: str) -> bool:
    """Insert the acknowledgment row if missing. Returns whether a row was added."""
    if viewer_id in announcement.read_by:
        return False
    session.add(AnnouncementAcknowledgment(announcement_id=announcement.id, viewer_id=viewer_id))
    try:
        session.commit()
    except IntegrityError:
        # Another session acknowledged it first
        session.rollback()
        return False
    announcement.read_by = sorted(mark_read(announcement, viewer_id))
    return True


@router.get("/", response_model=List[AnnouncementRead], summary="List announcements")
def list_announcements(session: SessionDep, caller: CallerDep) -> List[AnnouncementRead]:
    now = _now()
    result = _load_announcements(session)
    for item in result:
        item.is_new = is_unread(item, caller.viewer_id, now)
    return result


@router.post(
    "/",
    response_model=AnnouncementRead,
    status_code=status.HTTP_201_CREATED,
    summary="Publish announcement",
)
def create_announcement(
    payload: AnnouncementCreate,
    session: SessionDep,
    caller: AdminDep,
) -> AnnouncementRead:
    announcement = Announcement(title=payload.title, body=payload.body)
    session.add(announcement)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to create announcement")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create announcement",
        ) from None
    session.refresh(announcement)
    logger.info(f"Announcement published: {announcement.id}")
    return AnnouncementRead(
        id=announcement.id,
        title=announcement.title,
        body=announcement.body,
        created_at=announcement.created_at,
    )


@router.delete(
    "/{announcement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete announcement",
)
def delete_announcement(announcement_id: UUID, session: SessionDep, caller: AdminDep) -> Response:
    announcement = session.get(Announcement, announcement_id)
    if not announcement:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Announcement not found",
        )
    acknowledgments = session.exec(
        select(AnnouncementAcknowledgment).where(
            AnnouncementAcknowledgment.announcement_id == announcement_id
        )
    ).all()
    for ack in acknowledgments:
        session.delete(ack)
    session.delete(announcement)
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{announcement_id}/read",
    response_model=AnnouncementRead,
    summary="Mark announcement as read",
)
def read_announcement(
    announcement_id: UUID,
    session: SessionDep,
    caller: CallerDep,
) -> AnnouncementRead:
    if not caller.viewer_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Viewer id is required",
        )
    announcement = next(
        (item for item in _load_announcements(session) if item.id == announcement_id),
        None,
    )
    if announcement is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Announcement not found",
        )
    _acknowledge(session, announcement, caller.viewer_id)
    return announcement


@router.post(
    "/acknowledge",
    response_model=AcknowledgeResponse,
    summary="Acknowledge every new announcement",
)
def acknowledge_pending(session: SessionDep, caller: CallerDep) -> AcknowledgeResponse:
    """Called once when the announcement panel opens."""
    if not caller.viewer_id:
        return AcknowledgeResponse()
    pending = pending_acknowledgments(_load_announcements(session), caller.viewer_id, _now())
    acknowledged = [item.id for item in pending if _acknowledge(session, item, caller.viewer_id)]
    if acknowledged:
        logger.info(f"Viewer {caller.viewer_id} acknowledged {len(acknowledged)} announcement(s)")
    return AcknowledgeResponse(acknowledged=acknowledged)
