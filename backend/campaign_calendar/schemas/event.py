from __future__ import annotations

import datetime as dt
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from campaign_calendar.core.constants import DEFAULT_URGENCY, URGENCY_LABELS, Urgency


class EventCreate(BaseModel):
    title: str = Field(max_length=255)
    date: dt.date
    urgency: Urgency = DEFAULT_URGENCY
    description: Optional[str] = Field(default=None, max_length=2000)
    department_id: Optional[UUID] = None
    assignee_id: Optional[UUID] = None

    @field_validator("title")
    @classmethod
    def check_title_not_blank(cls, title: str) -> str:
        title = title.strip()
        if not title:
            raise ValueError("Event title must not be empty")
        return title


class EventRead(BaseModel):
    id: UUID
    title: str
    date: dt.date
    urgency: str
    description: Optional[str] = None
    department_id: Optional[UUID] = None
    assignee_id: Optional[UUID] = None
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def urgency_label(self) -> str:
        return URGENCY_LABELS.get(self.urgency, URGENCY_LABELS[DEFAULT_URGENCY])
