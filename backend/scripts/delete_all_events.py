"""
Delete every campaign event, keeping departments, users, announcements
and the access table.

Usage:
    python scripts/delete_all_events.py
"""

import sys
from pathlib import Path

# Add the backend root to the import path
BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BASE_DIR))

from sqlmodel import Session, select

from campaign_calendar.db import engine
from campaign_calendar.models import Event


def delete_all_events():
    """Delete all events after confirmation."""
    with Session(engine) as session:
        try:
            events = session.exec(select(Event)).all()
            print(f"Found {len(events)} events")

            if not events:
                print("\nNothing to delete.")
                return

            response = input(f"\nDelete all {len(events)} events? (yes/no): ")
            if response.lower() not in ["yes", "y"]:
                print("Cancelled.")
                return

            for event in events:
                session.delete(event)
            session.commit()

            print(f"\n✓ Deleted {len(events)} events")
        except Exception as e:
            session.rollback()
            print(f"\n✗ Delete failed: {e}")
            raise


if __name__ == "__main__":
    print("=" * 60)
    print("Delete all events")
    print("=" * 60)
    delete_all_events()
    print("=" * 60)
