from __future__ import annotations

from typing import Any


class DealPatch:
    """Property set for a partial deal update.

    Only names recorded with ``set`` are sent. A recorded ``None`` is sent as
    an explicit null; a name never recorded leaves the CRM value untouched.
    """

    def __init__(self) -> None:
        self._properties: dict[str, Any] = {}

    def set(self, name: str, value: Any) -> DealPatch:
        self._properties[name] = value
        return self

    def set_if(self, condition: bool, name: str, value: Any) -> DealPatch:
        if condition:
            self._properties[name] = value
        return self

    def names(self) -> list[str]:
        return list(self._properties)

    def properties(self) -> dict[str, Any]:
        return dict(self._properties)

    def __contains__(self, name: object) -> bool:
        return name in self._properties

    def __bool__(self) -> bool:
        return bool(self._properties)

    def __repr__(self) -> str:
        return f"DealPatch({self._properties!r})"
