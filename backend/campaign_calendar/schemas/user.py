from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator


class UserCreate(BaseModel):
    name: str = Field(max_length=255)
    email: EmailStr
    avatar_glyph: Optional[str] = Field(default=None, max_length=32)
    avatar_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def check_name_not_blank(cls, name: str) -> str:
        name = name.strip()
        if not name:
            raise ValueError("User name must not be empty")
        return name

    @field_validator("avatar_glyph", "avatar_url")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value.strip() if value else value

    @model_validator(mode="after")
    def check_avatar_present(self) -> "UserCreate":
        if not self.avatar_glyph and not self.avatar_url:
            raise ValueError("Either avatar_glyph or avatar_url is required")
        return self


class UserRead(BaseModel):
    id: UUID
    name: str
    email: str
    avatar_glyph: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AvatarUploadResponse(BaseModel):
    avatar_url: str


class AvatarGlyphsRead(BaseModel):
    glyphs: list[str]
    default: str
