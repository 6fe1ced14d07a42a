from fastapi import APIRouter

from campaign_calendar.api.v1 import (
    access,
    announcements,
    departments,
    events,
    health,
    interchange,
    user_avatars,
    users,
)


api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(access.router, prefix="/access", tags=["access"])
api_router.include_router(announcements.router, prefix="/announcements", tags=["announcements"])
api_router.include_router(departments.router, prefix="/departments", tags=["departments"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(interchange.router, prefix="/interchange", tags=["interchange"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(user_avatars.router, prefix="/users", tags=["users"])
