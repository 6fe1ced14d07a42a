from .config import settings
from .constants import DEFAULT_URGENCY, URGENCY_LABELS, coerce_urgency

__all__ = [
    "settings",
    "DEFAULT_URGENCY",
    "URGENCY_LABELS",
    "coerce_urgency",
]
