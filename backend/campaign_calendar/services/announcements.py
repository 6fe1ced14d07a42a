"""Unread state of announcements.

An announcement is new for a viewer only on the calendar day it was posted and
only until that viewer acknowledges it.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional


def _as_aware(moment: datetime) -> datetime:
    # Stored timestamps without tzinfo are UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _local_day(moment: datetime, reference: datetime) -> date:
    if reference.tzinfo is None:
        return moment.date()
    return _as_aware(moment).astimezone(reference.tzinfo).date()


def is_unread(announcement: Any, viewer_id: Optional[str], now: datetime) -> bool:
    """Whether ``announcement`` is new for ``viewer_id``.

    New means posted on the same calendar day as ``now`` (in ``now``'s
    timezone) and not yet acknowledged by the viewer. Anonymous viewers never
    have anything new.
    """
    if not viewer_id:
        return False
    if _local_day(announcement.created_at, now) != now.date():
        return False
    return viewer_id not in (announcement.read_by or ())


def mark_read(announcement: Any, viewer_id: Optional[str]) -> frozenset[str]:
    """Return the acknowledgment set with ``viewer_id`` added."""
    read_by = frozenset(announcement.read_by or ())
    if not viewer_id:
        return read_by
    return read_by | {viewer_id}


def pending_acknowledgments(
    announcements: Iterable[Any],
    viewer_id: Optional[str],
    now: datetime,
) -> list[Any]:
    """Unread announcements for the viewer, newest first, each listed once."""
    seen = set()
    pending = []
    ordered = sorted(announcements, key=lambda item: _as_aware(item.created_at), reverse=True)
    for announcement in ordered:
        if announcement.id in seen:
            continue
        seen.add(announcement.id)
        if is_unread(announcement, viewer_id, now):
            pending.append(announcement)
    return pending
