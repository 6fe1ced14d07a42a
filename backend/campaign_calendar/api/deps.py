from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, Header, Request

from campaign_calendar.core.network import client_address
from campaign_calendar.db import SessionDep
from campaign_calendar.services.permissions import (
    Caller,
    ensure_elevated,
    load_access_table,
)


def get_client_address(request: Request) -> Optional[str]:
    return client_address(request)


def get_viewer_id(x_viewer_id: Annotated[Optional[str], Header()] = None) -> Optional[str]:
    if x_viewer_id is None or not x_viewer_id.strip():
        return None
    return x_viewer_id.strip()


def get_caller(
    session: SessionDep,
    address: Optional[str] = Depends(get_client_address),
    viewer_id: Optional[str] = Depends(get_viewer_id),
) -> Caller:
    table = load_access_table(session)
    return Caller(address=address, access=table.classify(address), viewer_id=viewer_id)


def get_admin_caller(caller: Caller = Depends(get_caller)) -> Caller:
    return ensure_elevated(caller)


CallerDep = Annotated[Caller, Depends(get_caller)]
AdminDep = Annotated[Caller, Depends(get_admin_caller)]
