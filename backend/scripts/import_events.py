#!/usr/bin/env python3
"""Import events from a CSV file exported by the admin panel.

Usage:
    python scripts/import_events.py path/to/export.csv
"""

import sys
from pathlib import Path

# Add the backend root to the import path
BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BASE_DIR))

from sqlmodel import Session, select

from campaign_calendar.db import engine, init_db
from campaign_calendar.models import Department, Event, User
from campaign_calendar.services.interchange import (
    ImportValidationError,
    decode_events,
    validate_import_text,
)


def import_file(path: Path) -> int:
    text = path.read_text(encoding="utf-8-sig")
    try:
        validate_import_text(text)
    except ImportValidationError as e:
        print(f"✗ {e}")
        return 1

    with Session(engine) as session:
        departments = session.exec(select(Department).order_by(Department.created_at)).all()
        users = session.exec(select(User).order_by(User.created_at)).all()
        result = decode_events(text, departments, users)

        created = 0
        for record in result.records:
            if not record.has_valid_date or not record.title.strip():
                continue
            session.add(
                Event(
                    title=record.title.strip(),
                    date=record.date,
                    urgency=record.urgency,
                    description=record.description,
                    department_id=record.department_id,
                    assignee_id=record.assignee_id,
                )
            )
            created += 1
        session.commit()

    for diagnostic in result.diagnostics:
        print(f"  line {diagnostic.line}: {diagnostic.code} {diagnostic.detail}")
    print(f"\n✓ Imported {created} events")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    init_db()
    sys.exit(import_file(Path(sys.argv[1])))
