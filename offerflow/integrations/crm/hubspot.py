from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

import httpx

from offerflow.core.config import Settings
from offerflow.core.exceptions import CRMRequestError
from offerflow.integrations.crm.base import CRMProvider


def _path_id(object_id: str) -> str:
    """Encode an object id as a single path segment (``/`` and ``.`` included)."""
    return quote(object_id, safe="").replace(".", "%2E")


def _error_details(response: httpx.Response) -> Any:
    """Upstream error payload: parsed JSON when possible, raw text otherwise."""
    try:
        return response.json()
    except ValueError:
        return response.text


class HubSpotCRMClient(CRMProvider):
    """HubSpot CRM v3 objects API client implementing CRMProvider protocol."""

    def __init__(self, settings: Settings) -> None:
        """Initialize the HubSpot client.

        Args:
            settings: Application settings holding the private app token and base URL.
        """
        self.base_url = settings.hubspot_api_url

        # One AsyncClient per instance so the reads of a request share a connection
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {settings.hubspot_api_token}",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(settings.hubspot_timeout),
        )

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an authenticated request to HubSpot and return the JSON object body.

        Failures are not retried.
        """
        try:
            response = await self.client.request(
                method=method,
                url=path,
                params=params,
                json=json,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CRMRequestError(
                e.response.status_code, _error_details(e.response)
            ) from e
        except httpx.HTTPError as e:
            raise CRMRequestError(None, str(e) or type(e).__name__) from e

        if response.status_code == 204 or not response.content:
            return {}

        try:
            data = response.json()
        except ValueError as e:
            raise CRMRequestError(
                response.status_code, "Malformed response from HubSpot"
            ) from e

        if not isinstance(data, dict):
            raise CRMRequestError(response.status_code, "Malformed response from HubSpot")
        return data

    async def get_deal(
        self,
        deal_id: str,
        properties: Sequence[str],
        associations: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """Fetch a deal with the given property projection and associations."""
        params = {"properties": ",".join(properties)}
        if associations:
            params["associations"] = ",".join(associations)
        return await self._request(
            "GET", f"/crm/v3/objects/deals/{_path_id(deal_id)}", params=params
        )

    async def get_contact(
        self, contact_id: str, properties: Sequence[str]
    ) -> dict[str, Any]:
        """Fetch a contact with the given property projection."""
        return await self._request(
            "GET",
            f"/crm/v3/objects/contacts/{_path_id(contact_id)}",
            params={"properties": ",".join(properties)},
        )

    async def update_deal(
        self, deal_id: str, properties: dict[str, Any]
    ) -> dict[str, Any]:
        """Partially update a deal. HubSpot leaves unlisted properties as they are."""
        return await self._request(
            "PATCH",
            f"/crm/v3/objects/deals/{_path_id(deal_id)}",
            json={"properties": properties},
        )

    async def ping(self) -> None:
        await self._request("GET", "/crm/v3/objects/deals", params={"limit": 1})

    async def __aenter__(self) -> HubSpotCRMClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()
