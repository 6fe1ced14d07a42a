from __future__ import annotations

from datetime import datetime

from sqlmodel import JSON, Column, Field, SQLModel

ACCESS_CONFIG_ID = 1


class AccessConfig(SQLModel, table=True):
    """Singleton row holding the address-based access table."""

    __tablename__ = "access_config"

    id: int = Field(default=ACCESS_CONFIG_ID, primary_key=True)
    # Addresses with unconditional administrator access, in insertion order
    elevated_addresses: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    # address -> department id (as string)
    department_addresses: dict[str, str] = Field(default_factory=dict, sa_column=Column(JSON))
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    def touch(self) -> None:
        """Update timestamp."""
        self.updated_at = datetime.utcnow()
