from __future__ import annotations

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class AnnouncementCreate(BaseModel):
    title: str = Field(max_length=255)
    body: str = Field(max_length=4000)

    @field_validator("title", "body")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title and body must not be empty")
        return value


class AnnouncementRead(BaseModel):
    id: UUID
    title: str
    body: str
    created_at: datetime
    read_by: List[str] = Field(default_factory=list)
    is_new: bool = False  # For the requesting viewer


class AcknowledgeResponse(BaseModel):
    acknowledged: List[UUID] = Field(default_factory=list)
