"""Address-based access table.

Two independent structures decide what a caller may do:

* elevated addresses get administrator access unconditionally;
* department addresses map one address to one department, giving a viewer
  scoped to that department's events.

Elevated status is checked first. Any address found in neither structure is
unclassified and gets no access.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Literal, Mapping, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

AccessTier = Literal["elevated", "department", "unclassified"]

ELEVATED: AccessTier = "elevated"
DEPARTMENT: AccessTier = "department"
UNCLASSIFIED: AccessTier = "unclassified"

_ADDRESS_SEPARATORS = re.compile(r"[,\s]+")


class AccessTableError(ValueError):
    """Base class for rejected access table changes."""


class EmptyAddressError(AccessTableError):
    pass


class DuplicateAddressError(AccessTableError):
    def __init__(self, address: str):
        super().__init__(f"Address {address} is already an administrator address")
        self.address = address


class AddressConflictError(AccessTableError):
    def __init__(self, addresses: list[str]):
        super().__init__(f"Addresses already mapped: {', '.join(addresses)}")
        self.addresses = addresses


class AccessClassification(BaseModel):
    tier: AccessTier
    department_id: Optional[str] = None

    @property
    def is_elevated(self) -> bool:
        return self.tier == ELEVATED


def parse_address_list(text: str) -> list[str]:
    """Split comma and/or whitespace separated addresses, dropping duplicates."""
    addresses: list[str] = []
    for address in _ADDRESS_SEPARATORS.split(text or ""):
        if address and address not in addresses:
            addresses.append(address)
    return addresses


class AccessTable:
    """Mutable access table. Rejected changes leave the table untouched."""

    def __init__(
        self,
        elevated: Iterable[str] = (),
        department_map: Optional[Mapping[str, Any]] = None,
    ):
        self._elevated: list[str] = []
        for address in elevated:
            if address not in self._elevated:
                self._elevated.append(address)
        self._departments: dict[str, str] = {
            address: str(department_id)
            for address, department_id in (department_map or {}).items()
        }

    @classmethod
    def from_record(cls, record: Any) -> "AccessTable":
        """Build a table from a persisted ``AccessConfig``-shaped record."""
        if record is None:
            return cls()
        return cls(
            elevated=getattr(record, "elevated_addresses", None) or [],
            department_map=getattr(record, "department_addresses", None) or {},
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "elevated_addresses": list(self._elevated),
            "department_addresses": dict(self._departments),
        }

    @property
    def elevated(self) -> list[str]:
        return list(self._elevated)

    @property
    def department_map(self) -> dict[str, str]:
        return dict(self._departments)

    def add_elevated(self, address: str) -> None:
        address = (address or "").strip()
        if not address:
            raise EmptyAddressError("Address must not be empty")
        if address in self._elevated:
            raise DuplicateAddressError(address)
        self._elevated.append(address)
        logger.info(f"Elevated address added: {address}")

    def remove_elevated(self, address: str) -> None:
        address = (address or "").strip()
        if address in self._elevated:
            self._elevated.remove(address)
            logger.info(f"Elevated address removed: {address}")

    def add_department_mapping(self, address_list_text: str, department_id: Any) -> list[str]:
        """Map every address in the batch to ``department_id``.

        The batch is applied all-or-nothing. Returns the addresses added.
        """
        addresses = parse_address_list(address_list_text)
        department = str(department_id).strip() if department_id is not None else ""
        if not addresses or not department:
            raise EmptyAddressError("Address list and department are required")

        conflicts = [address for address in addresses if address in self._departments]
        if conflicts:
            raise AddressConflictError(conflicts)

        for address in addresses:
            self._departments[address] = department
        logger.info(f"Mapped {len(addresses)} address(es) to department {department}")
        return addresses

    def remove_department_mapping(self, address: str) -> None:
        address = (address or "").strip()
        if self._departments.pop(address, None) is not None:
            logger.info(f"Department mapping removed: {address}")

    def classify(self, address: Optional[str]) -> AccessClassification:
        if address:
            if address in self._elevated:
                return AccessClassification(tier=ELEVATED)
            department_id = self._departments.get(address)
            if department_id:
                return AccessClassification(tier=DEPARTMENT, department_id=department_id)
        return AccessClassification(tier=UNCLASSIFIED)
