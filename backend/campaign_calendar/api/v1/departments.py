from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response
from sqlmodel import select

from campaign_calendar.api.deps import AdminDep, CallerDep
from campaign_calendar.db import SessionDep
from campaign_calendar.models import Department, Event
from campaign_calendar.schemas import DepartmentCreate, DepartmentRead
from campaign_calendar.services.permissions import ensure_classified

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[DepartmentRead], summary="List departments")
def list_departments(session: SessionDep, caller: CallerDep) -> List[DepartmentRead]:
    ensure_classified(caller)
    statement = select(Department).order_by(Department.created_at.asc())
    return [DepartmentRead.model_validate(dept) for dept in session.exec(statement).all()]


@router.post(
    "/",
    response_model=DepartmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create department",
)
def create_department(
    payload: DepartmentCreate,
    session: SessionDep,
    caller: AdminDep,
) -> DepartmentRead:
    department = Department(name=payload.name)
    session.add(department)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to create department")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create department",
        ) from None
    session.refresh(department)
    logger.info(f"Department created: {department.id} ({department.name})")
    return DepartmentRead.model_validate(department)


@router.delete(
    "/{department_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete department",
)
def delete_department(department_id: UUID, session: SessionDep, caller: AdminDep) -> Response:
    department = session.get(Department, department_id)
    if not department:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Department not found",
        )

    # Events keep existing without a department
    events = session.exec(select(Event).where(Event.department_id == department_id)).all()
    for event in events:
        event.department_id = None
        session.add(event)

    session.delete(department)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.exception(f"Failed to delete department {department_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not delete department",
        ) from None
    logger.info(f"Department deleted: {department_id}, {len(events)} event(s) detached")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
