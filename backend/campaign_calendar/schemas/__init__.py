from .access import AccessTableRead, CallerRead, DepartmentMappingCreate, ElevatedAddressCreate
from .announcement import AcknowledgeResponse, AnnouncementCreate, AnnouncementRead
from .department import DepartmentCreate, DepartmentRead
from .event import EventCreate, EventRead
from .interchange import (
    DecodeResult,
    ImportRequest,
    ImportResponse,
    LineDiagnostic,
    PartialEvent,
)
from .user import AvatarGlyphsRead, AvatarUploadResponse, UserCreate, UserRead

__all__ = [
    "AccessTableRead",
    "AcknowledgeResponse",
    "AnnouncementCreate",
    "AnnouncementRead",
    "AvatarGlyphsRead",
    "AvatarUploadResponse",
    "CallerRead",
    "DecodeResult",
    "DepartmentCreate",
    "DepartmentMappingCreate",
    "DepartmentRead",
    "ElevatedAddressCreate",
    "EventCreate",
    "EventRead",
    "ImportRequest",
    "ImportResponse",
    "LineDiagnostic",
    "PartialEvent",
    "UserCreate",
    "UserRead",
]
