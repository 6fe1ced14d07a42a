"""Rate limiting configuration."""

from __future__ import annotations

import logging

from slowapi import Limiter

from campaign_calendar.core.config import settings
from campaign_calendar.core.network import client_address

logger = logging.getLogger(__name__)

# Keyed on the same address the access table classifies
limiter = Limiter(
    key_func=client_address,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    enabled=settings.RATE_LIMIT_ENABLED,
)
logger.info(f"Rate limiter configured with storage: {settings.RATE_LIMIT_STORAGE_URI}")
