"""Fixed vocabularies shared by models, schemas and the interchange codec."""

from __future__ import annotations

from typing import Literal

Urgency = Literal["Low", "Medium", "High", "Critical"]

# Ordered from least to most urgent; values are display labels.
URGENCY_LABELS: dict[str, str] = {
    "Low": "Düşük",
    "Medium": "Orta",
    "High": "Yüksek",
    "Critical": "Kritik",
}

DEFAULT_URGENCY: Urgency = "Medium"

# Palette offered by the admin panel when no photo is uploaded
AVATAR_GLYPHS: tuple[str, ...] = (
    "👨‍💻", "👩‍💻", "👨‍🎨", "👩‍🎨", "👨‍💼", "👩‍💼",
    "🚀", "⭐", "🔥", "💡", "🎯", "📈",
)

DEFAULT_AVATAR_GLYPH = "👤"


def coerce_urgency(value: str | None) -> Urgency:
    """Return ``value`` if it is a known urgency level, otherwise the default."""
    if value in URGENCY_LABELS:
        return value  # type: ignore[return-value]
    return DEFAULT_URGENCY
