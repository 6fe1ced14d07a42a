from __future__ import annotations

from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from campaign_calendar.services.access import AccessTier


class ElevatedAddressCreate(BaseModel):
    address: str = Field(max_length=255)


class DepartmentMappingCreate(BaseModel):
    # One or more addresses separated by commas and/or whitespace
    addresses: str
    department_id: UUID


class AccessTableRead(BaseModel):
    elevated_addresses: List[str] = Field(default_factory=list)
    department_addresses: Dict[str, str] = Field(default_factory=dict)


class CallerRead(BaseModel):
    address: Optional[str] = None
    tier: AccessTier
    department_id: Optional[str] = None
    viewer_id: Optional[str] = None
