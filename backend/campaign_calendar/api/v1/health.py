import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from campaign_calendar.db import SessionDep
from campaign_calendar.services.permissions import load_access_table

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", summary="Liveness check")
def read_health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/ready", summary="Readiness check")
def read_ready(session: SessionDep):
    """Ready once the access table can be read.

    An empty table is still ready, but ``administrators`` is 0 until the
    first address is added with ``scripts/manage_access.py``.
    """
    try:
        table = load_access_table(session)
    except SQLAlchemyError:
        logger.exception("Access table is not readable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "detail": "Access table is not readable"},
        )
    return {
        "status": "ready",
        "administrators": len(table.elevated),
        "department_addresses": len(table.department_map),
    }
