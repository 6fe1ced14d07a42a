from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from campaign_calendar.api.deps import AdminDep, CallerDep
from campaign_calendar.db import SessionDep
from campaign_calendar.models import Department
from campaign_calendar.schemas import (
    AccessTableRead,
    CallerRead,
    DepartmentMappingCreate,
    ElevatedAddressCreate,
)
from campaign_calendar.services.access import (
    AddressConflictError,
    DuplicateAddressError,
    EmptyAddressError,
    AccessTable,
)
from campaign_calendar.services.permissions import load_access_table, store_access_table

logger = logging.getLogger(__name__)

router = APIRouter()


def _read(table: AccessTable) -> AccessTableRead:
    return AccessTableRead(
        elevated_addresses=table.elevated,
        department_addresses=table.department_map,
    )


@router.get("/me", response_model=CallerRead, summary="Classify the calling address")
def read_own_access(caller: CallerDep) -> CallerRead:
    return CallerRead(
        address=caller.address,
        tier=caller.access.tier,
        department_id=caller.access.department_id,
        viewer_id=caller.viewer_id,
    )


@router.get("/", response_model=AccessTableRead, summary="Get access table")
def read_access_table(session: SessionDep, caller: AdminDep) -> AccessTableRead:
    return _read(load_access_table(session))


@router.post(
    "/elevated",
    response_model=AccessTableRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add administrator address",
)
def add_elevated_address(
    payload: ElevatedAddressCreate,
    session: SessionDep,
    caller: AdminDep,
) -> AccessTableRead:
    table = load_access_table(session)
    try:
        table.add_elevated(payload.address)
    except EmptyAddressError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    except DuplicateAddressError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from None
    store_access_table(session, table)
    logger.info(f"{caller.address} added administrator address {payload.address.strip()}")
    return _read(table)


@router.delete(
    "/elevated/{address}",
    response_model=AccessTableRead,
    summary="Remove administrator address",
)
def remove_elevated_address(address: str, session: SessionDep, caller: AdminDep) -> AccessTableRead:
    table = load_access_table(session)
    table.remove_elevated(address)
    store_access_table(session, table)
    return _read(table)


@router.post(
    "/departments",
    response_model=AccessTableRead,
    status_code=status.HTTP_201_CREATED,
    summary="Map addresses to a department",
)
def add_department_mapping(
    payload: DepartmentMappingCreate,
    session: SessionDep,
    caller: AdminDep,
) -> AccessTableRead:
    if not session.get(Department, payload.department_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Department not found",
        )

    table = load_access_table(session)
    try:
        added = table.add_department_mapping(payload.addresses, payload.department_id)
    except EmptyAddressError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    except AddressConflictError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": "Addresses already mapped", "addresses": exc.addresses},
        ) from None
    store_access_table(session, table)
    logger.info(f"{caller.address} mapped {', '.join(added)} to department {payload.department_id}")
    return _read(table)


@router.delete(
    "/departments/{address}",
    response_model=AccessTableRead,
    summary="Remove department mapping",
)
def remove_department_mapping(address: str, session: SessionDep, caller: AdminDep) -> AccessTableRead:
    table = load_access_table(session)
    table.remove_department_mapping(address)
    store_access_table(session, table)
    return _read(table)
