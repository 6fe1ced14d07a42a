import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import Response
from sqlmodel import select

from campaign_calendar.api.deps import AdminDep
from campaign_calendar.core.config import settings
from campaign_calendar.core.limiter import limiter
from campaign_calendar.db import SessionDep
from campaign_calendar.models import Department, Event, User
from campaign_calendar.schemas import ImportRequest, ImportResponse, LineDiagnostic
from campaign_calendar.services.interchange import (
    CSV_MEDIA_TYPE,
    ImportTooLargeError,
    ImportValidationError,
    decode_events,
    encode_events,
    export_filename,
    validate_import_text,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/export", summary="Export events as CSV")
def export_events(session: SessionDep, caller: AdminDep) -> Response:
    events = session.exec(select(Event).order_by(Event.date.asc(), Event.created_at.asc())).all()
    departments = session.exec(select(Department).order_by(Department.created_at.asc())).all()
    users = session.exec(select(User).order_by(User.created_at.asc())).all()

    content = encode_events(events, departments, users)
    filename = export_filename(settings.EXPORT_FILENAME_PREFIX, date.today())
    logger.info(f"{caller.address} exported {len(events)} events as {filename}")
    return Response(
        content=content,
        media_type=f"{CSV_MEDIA_TYPE}; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "/import",
    response_model=ImportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Import events from CSV",
)
@limiter.limit(settings.IMPORT_RATE_LIMIT)
def import_events(
    request: Request,
    payload: ImportRequest,
    session: SessionDep,
    caller: AdminDep,
) -> ImportResponse:
    try:
        validate_import_text(payload.text, settings.MAX_IMPORT_BYTES)
    except ImportTooLargeError as exc:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(exc)
        ) from None
    except ImportValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None

    departments = session.exec(select(Department).order_by(Department.created_at.asc())).all()
    users = session.exec(select(User).order_by(User.created_at.asc())).all()
    decoded = decode_events(payload.text, departments, users)

    diagnostics = list(decoded.diagnostics)
    events: list[Event] = []
    skipped = sum(1 for item in diagnostics if item.code == "too_few_fields")
    for record in decoded.records:
        # Rows that would break event invariants are reported, not stored
        if not record.has_valid_date:
            skipped += 1
            continue
        if not record.title.strip():
            diagnostics.append(LineDiagnostic(line=record.line, code="missing_title"))
            skipped += 1
            continue
        events.append(
            Event(
                title=record.title.strip(),
                date=record.date,
                urgency=record.urgency,
                description=record.description,
                department_id=record.department_id,
                assignee_id=record.assignee_id,
            )
        )

    if not events:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "No importable lines",
                "diagnostics": [item.model_dump() for item in diagnostics],
            },
        )

    session.add_all(events)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to store imported events")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not store imported events",
        ) from None

    logger.info(f"{caller.address} imported {len(events)} events, skipped {skipped} line(s)")
    return ImportResponse(
        created=len(events),
        skipped=skipped,
        event_ids=[event.id for event in events],
        diagnostics=sorted(diagnostics, key=lambda item: item.line),
    )
