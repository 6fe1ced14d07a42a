from __future__ import annotations

import datetime as dt
from typing import List, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field

from campaign_calendar.core.constants import DEFAULT_URGENCY, Urgency

DiagnosticCode = Literal[
    "too_few_fields",
    "unparseable_date",
    "unknown_urgency",
    "unresolved_department",
    "unresolved_assignee",
    "missing_title",
]


class PartialEvent(BaseModel):
    """Event fields recovered from one imported line, not yet persisted."""

    title: str
    # Left as the raw text when it could not be parsed
    date: Union[dt.date, str]
    urgency: Urgency = DEFAULT_URGENCY
    description: Optional[str] = None
    department_id: Optional[UUID] = None
    assignee_id: Optional[UUID] = None
    line: int = Field(default=0, description="1-based line number in the source text")

    @property
    def has_valid_date(self) -> bool:
        return isinstance(self.date, dt.date)


class LineDiagnostic(BaseModel):
    line: int
    code: DiagnosticCode
    detail: str = ""


class DecodeResult(BaseModel):
    records: List[PartialEvent] = Field(default_factory=list)
    diagnostics: List[LineDiagnostic] = Field(default_factory=list)


class ImportRequest(BaseModel):
    text: str


class ImportResponse(BaseModel):
    created: int
    skipped: int
    event_ids: List[UUID] = Field(default_factory=list)
    diagnostics: List[LineDiagnostic] = Field(default_factory=list)
