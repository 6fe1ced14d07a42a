"""CSV import/export of campaign events.

The exported file has a fixed header followed by one line per event::

    Title,Date,Urgency,Description,Department,Assignee
    "Spring Sale","2024-03-01","High","","Marketing","Ali Veli"

Department and assignee travel as display names and are resolved back to
identifiers on import. Import is lenient: unknown urgencies fall back to the
default level, unknown names are dropped, and malformed lines are skipped.
"""

from __future__ import annotations

import csv
import datetime as dt
import io
import logging
from typing import Any, Iterable, Iterator, Optional

from campaign_calendar.core.constants import URGENCY_LABELS, coerce_urgency
from campaign_calendar.schemas.interchange import DecodeResult, LineDiagnostic, PartialEvent
from campaign_calendar.services.references import ReferenceResolver

logger = logging.getLogger(__name__)

CSV_HEADER = ("Title", "Date", "Urgency", "Description", "Department", "Assignee")
CSV_MEDIA_TYPE = "text/csv"
DATE_FORMAT = "%Y-%m-%d"
MIN_FIELDS = 3

QUOTE = '"'
SEPARATOR = ","


class ImportValidationError(ValueError):
    """Tabular input that cannot be imported at all."""


class ImportTooLargeError(ImportValidationError):
    pass


def _format_date(value: Any) -> str:
    if isinstance(value, (dt.date, dt.datetime)):
        return value.strftime(DATE_FORMAT)
    return str(value)


def encode_events(
    events: Iterable[Any],
    departments: Iterable[Any] = (),
    users: Iterable[Any] = (),
) -> str:
    """Render events as CSV text. Every field is quoted."""
    resolver = ReferenceResolver(departments, users)
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buffer.write(SEPARATOR.join(CSV_HEADER) + "\n")
    for event in events:
        writer.writerow(
            [
                event.title,
                _format_date(event.date),
                coerce_urgency(event.urgency),
                event.description or "",
                resolver.department_name(event.department_id),
                resolver.user_name(event.assignee_id),
            ]
        )
    return buffer.getvalue()


def split_fields(line: str) -> list[str]:
    """Split one CSV line, keeping separators that sit inside quotes."""
    fields: list[str] = []
    start = 0
    in_quotes = False
    for index, char in enumerate(line):
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == SEPARATOR and not in_quotes:
            fields.append(_unquote(line[start:index]))
            start = index + 1
    fields.append(_unquote(line[start:]))
    return fields


def _unquote(field: str) -> str:
    if field.startswith(QUOTE):
        field = field[1:]
    if field.endswith(QUOTE):
        field = field[:-1]
    return field.replace(QUOTE * 2, QUOTE)


def _opens_quoted_field(line: str) -> bool:
    """Whether ``line`` ends inside a field that began with a quote.

    A quote only opens a field when it is the first character of that field;
    anywhere else in an unquoted field it is a literal character.
    """
    in_quotes = False
    at_field_start = True
    index = 0
    while index < len(line):
        char = line[index]
        if in_quotes:
            if char == QUOTE:
                if line[index + 1:index + 2] == QUOTE:
                    index += 1
                else:
                    in_quotes = False
        elif char == QUOTE and at_field_start:
            in_quotes = True
        at_field_start = not in_quotes and char == SEPARATOR
        index += 1
    return in_quotes


def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` pairs, joining lines broken inside quoted fields."""
    pending: Optional[str] = None
    pending_start = 0
    for number, raw in enumerate(text.split("\n"), start=1):
        if pending is None:
            chunk, pending_start = raw, number
        else:
            chunk = pending + "\n" + raw
        if _opens_quoted_field(chunk):
            pending = chunk
            continue
        pending = None
        # Carriage returns inside a quoted field are part of the value
        yield pending_start, chunk.rstrip("\r")
    if pending is not None:
        yield pending_start, pending.rstrip("\r")


def _parse_date(value: str) -> Optional[dt.date]:
    try:
        return dt.datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def _column(fields: list[str], index: int) -> str:
    return fields[index] if index < len(fields) else ""


def decode_events(
    text: str,
    departments: Iterable[Any] = (),
    users: Iterable[Any] = (),
) -> DecodeResult:
    """Parse CSV text into partial events plus per-line diagnostics.

    The first line is a header and is always skipped. Nothing is persisted.
    """
    resolver = ReferenceResolver(departments, users)
    result = DecodeResult()
    lines = _logical_lines(text.strip())
    next(lines, None)

    for number, raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue

        fields = split_fields(line)
        if len(fields) < MIN_FIELDS:
            result.diagnostics.append(
                LineDiagnostic(
                    line=number,
                    code="too_few_fields",
                    detail=f"expected at least {MIN_FIELDS} fields, got {len(fields)}",
                )
            )
            continue

        title, raw_date, raw_urgency = fields[0], fields[1], fields[2]
        description = _column(fields, 3)
        department_name = _column(fields, 4)
        assignee_name = _column(fields, 5)

        parsed_date = _parse_date(raw_date)
        if parsed_date is None:
            result.diagnostics.append(
                LineDiagnostic(line=number, code="unparseable_date", detail=raw_date)
            )

        urgency = coerce_urgency(raw_urgency)
        if raw_urgency not in URGENCY_LABELS:
            result.diagnostics.append(
                LineDiagnostic(line=number, code="unknown_urgency", detail=raw_urgency)
            )

        department_id = resolver.department_id(department_name)
        if department_name and department_id is None:
            result.diagnostics.append(
                LineDiagnostic(line=number, code="unresolved_department", detail=department_name)
            )

        assignee_id = resolver.user_id(assignee_name)
        if assignee_name and assignee_id is None:
            result.diagnostics.append(
                LineDiagnostic(line=number, code="unresolved_assignee", detail=assignee_name)
            )

        result.records.append(
            PartialEvent(
                title=title,
                date=parsed_date if parsed_date is not None else raw_date,
                urgency=urgency,
                description=description or None,
                department_id=department_id,
                assignee_id=assignee_id,
                line=number,
            )
        )

    logger.debug(
        f"Decoded {len(result.records)} records with {len(result.diagnostics)} diagnostics"
    )
    return result


def validate_import_text(text: str, max_bytes: Optional[int] = None) -> None:
    """Reject input that cannot contain a single event line."""
    if max_bytes is not None and len(text.encode("utf-8")) > max_bytes:
        raise ImportTooLargeError(f"Import text exceeds {max_bytes} bytes")
    if not text.strip():
        raise ImportValidationError("CSV input is empty")
    lines = [line for line in text.strip().split("\n") if line.strip()]
    if len(lines) < 2:
        raise ImportValidationError("CSV input contains only a header")


def export_filename(prefix: str, today: dt.date) -> str:
    return f"{prefix}_{today.strftime(DATE_FORMAT)}.csv"
