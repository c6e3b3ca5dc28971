from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol


class CRMProvider(Protocol):
    """Abstract CRM provider interface.

    Implementations raise ``CRMRequestError`` for any failed call.
    """

    async def get_deal(
        self,
        deal_id: str,
        properties: Sequence[str],
        associations: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """Fetch a deal with the given property projection and associations."""
        ...

    async def get_contact(
        self, contact_id: str, properties: Sequence[str]
    ) -> dict[str, Any]:
        """Fetch a contact with the given property projection."""
        ...

    async def update_deal(
        self, deal_id: str, properties: dict[str, Any]
    ) -> dict[str, Any]:
        """Partially update a deal. Properties not given are left untouched."""
        ...

    async def ping(self) -> None:
        """Cheap authenticated call used by the health check."""
        ...
