from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class Announcement(SQLModel, table=True):
    """Broadcast message shown to every viewer."""

    __tablename__ = "announcements"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    title: str = Field(max_length=255)
    body: str = Field(max_length=4000)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), nullable=False, index=True
    )


class AnnouncementAcknowledgment(SQLModel, table=True):
    """A viewer having seen an announcement. Rows are only ever added."""

    __tablename__ = "announcement_acknowledgments"
    __table_args__ = (
        UniqueConstraint("announcement_id", "viewer_id", name="uq_announcement_viewer"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    announcement_id: UUID = Field(
        foreign_key="announcements.id", nullable=False, index=True, ondelete="CASCADE"
    )
    viewer_id: str = Field(max_length=255, nullable=False, index=True)
    acknowledged_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), nullable=False
    )
