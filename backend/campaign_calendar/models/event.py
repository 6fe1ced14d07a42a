from __future__ import annotations

import datetime as dt
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from campaign_calendar.core.constants import DEFAULT_URGENCY


class Event(SQLModel, table=True):
    """Campaign calendar event."""

    __tablename__ = "events"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    title: str = Field(max_length=255)
    date: dt.date = Field(nullable=False, index=True)
    urgency: str = Field(default=DEFAULT_URGENCY, max_length=20)
    description: Optional[str] = Field(default=None, max_length=2000)
    department_id: Optional[UUID] = Field(
        default=None,
        foreign_key="departments.id",
        nullable=True,
        index=True,
        ondelete="SET NULL",
    )
    assignee_id: Optional[UUID] = Field(
        default=None,
        foreign_key="users.id",
        nullable=True,
        index=True,
        ondelete="SET NULL",
    )
    created_at: dt.datetime = Field(default_factory=dt.datetime.utcnow, nullable=False)
