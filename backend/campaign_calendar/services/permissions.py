from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from fastapi import HTTPException, status
from pydantic import BaseModel
from sqlmodel import Session

from campaign_calendar.models import ACCESS_CONFIG_ID, AccessConfig
from campaign_calendar.services.access import (
    DEPARTMENT,
    UNCLASSIFIED,
    AccessClassification,
    AccessTable,
)

logger = logging.getLogger(__name__)


class Caller(BaseModel):
    """Capability of the party making a request, resolved once per request."""

    address: Optional[str] = None
    access: AccessClassification
    viewer_id: Optional[str] = None

    @property
    def is_elevated(self) -> bool:
        return self.access.is_elevated


def load_access_config(session: Session) -> AccessConfig:
    config = session.get(AccessConfig, ACCESS_CONFIG_ID)
    if config is None:
        config = AccessConfig(id=ACCESS_CONFIG_ID)
    return config


def load_access_table(session: Session) -> AccessTable:
    return AccessTable.from_record(session.get(AccessConfig, ACCESS_CONFIG_ID))


def store_access_table(session: Session, table: AccessTable) -> AccessConfig:
    """Persist ``table`` as the single access config row."""
    config = load_access_config(session)
    record = table.to_record()
    config.elevated_addresses = record["elevated_addresses"]
    config.department_addresses = record["department_addresses"]
    config.touch()
    session.add(config)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to store access table")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not save access table",
        ) from None
    session.refresh(config)
    return config


def ensure_elevated(caller: Caller) -> Caller:
    if not caller.is_elevated:
        logger.info(f"Administrative access denied for {caller.address}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required",
        )
    return caller


def ensure_classified(caller: Caller) -> Caller:
    if caller.access.tier == UNCLASSIFIED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Address is not authorized",
        )
    return caller


def scoped_department_id(caller: Caller) -> Optional[UUID]:
    """Department a scoped caller is limited to, ``None`` for administrators.

    Raises 403 for unclassified callers.
    """
    ensure_classified(caller)
    if caller.access.tier != DEPARTMENT:
        return None
    try:
        return UUID(str(caller.access.department_id))
    except ValueError:
        logger.warning(
            f"Address {caller.address} maps to invalid department id {caller.access.department_id}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Address is mapped to an unknown department",
        ) from None
