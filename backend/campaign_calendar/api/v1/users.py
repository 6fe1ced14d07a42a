from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response
from sqlmodel import select

from campaign_calendar.api.deps import AdminDep, CallerDep
from campaign_calendar.db import SessionDep
from campaign_calendar.models import Event, User
from campaign_calendar.schemas import UserCreate, UserRead
from campaign_calendar.services.permissions import ensure_classified

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[UserRead], summary="List users")
def list_users(session: SessionDep, caller: CallerDep) -> List[UserRead]:
    ensure_classified(caller)
    statement = select(User).order_by(User.created_at.asc())
    return [UserRead.model_validate(user) for user in session.exec(statement).all()]


@router.post(
    "/",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
def create_user(payload: UserCreate, session: SessionDep, caller: AdminDep) -> UserRead:
    user = User(
        name=payload.name,
        email=payload.email.lower(),
        avatar_glyph=payload.avatar_glyph,
        avatar_url=payload.avatar_url,
    )
    session.add(user)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to create user")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create user",
        ) from None
    session.refresh(user)
    logger.info(f"User created: {user.id} ({user.email})")
    return UserRead.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
)
def delete_user(user_id: UUID, session: SessionDep, caller: AdminDep) -> Response:
    user = session.get(User, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    events = session.exec(select(Event).where(Event.assignee_id == user_id)).all()
    for event in events:
        event.assignee_id = None
        session.add(event)

    session.delete(user)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.exception(f"Failed to delete user {user_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not delete user",
        ) from None
    logger.info(f"User deleted: {user_id}, {len(events)} event(s) unassigned")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
