from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DepartmentCreate(BaseModel):
    name: str = Field(max_length=255)

    @field_validator("name")
    @classmethod
    def check_name_not_blank(cls, name: str) -> str:
        name = name.strip()
        if not name:
            raise ValueError("Department name must not be empty")
        return name


class DepartmentRead(BaseModel):
    id: UUID
    name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
