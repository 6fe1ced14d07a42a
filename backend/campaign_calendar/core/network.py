from __future__ import annotations

from typing import Optional

from starlette.requests import Request

from campaign_calendar.core.config import settings


def client_address(request: Request) -> Optional[str]:
    """Network address of the caller.

    Behind a trusted proxy this is the first ``X-Forwarded-For`` entry,
    otherwise the connection peer.
    """
    if settings.TRUST_FORWARDED_FOR:
        forwarded = request.headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else None
