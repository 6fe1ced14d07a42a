from .access_config import ACCESS_CONFIG_ID, AccessConfig
from .announcement import Announcement, AnnouncementAcknowledgment
from .department import Department
from .event import Event
from .user import User

__all__ = [
    "ACCESS_CONFIG_ID",
    "AccessConfig",
    "Announcement",
    "AnnouncementAcknowledgment",
    "Department",
    "Event",
    "User",
]
