"""Name <-> identifier lookups for departments and users.

Names are not unique. When several entities share a name, lookups by name
return the first one in the order the entities were given.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional


def _build_indexes(items: Iterable[Any]) -> tuple[dict[str, str], dict[str, Any]]:
    names_by_id: dict[str, str] = {}
    ids_by_name: dict[str, Any] = {}
    for item in items:
        names_by_id.setdefault(str(item.id), item.name or "")
        if item.name:
            ids_by_name.setdefault(item.name, item.id)
    return names_by_id, ids_by_name


class ReferenceResolver:
    """Resolve department and user references for the interchange codec.

    Every lookup is total: unknown ids resolve to an empty name and unknown
    names resolve to ``None``.
    """

    def __init__(self, departments: Iterable[Any] = (), users: Iterable[Any] = ()):
        self._department_names, self._department_ids = _build_indexes(departments)
        self._user_names, self._user_ids = _build_indexes(users)

    def department_name(self, department_id: Any) -> str:
        if department_id is None:
            return ""
        return self._department_names.get(str(department_id), "")

    def department_id(self, name: Optional[str]) -> Optional[Any]:
        if not name:
            return None
        return self._department_ids.get(name)

    def user_name(self, user_id: Any) -> str:
        if user_id is None:
            return ""
        return self._user_names.get(str(user_id), "")

    def user_id(self, name: Optional[str]) -> Optional[Any]:
        if not name:
            return None
        return self._user_ids.get(name)
