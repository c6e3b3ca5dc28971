from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Depends

from offerflow.core.config import Settings, settings
from offerflow.integrations.crm.base import CRMProvider
from offerflow.integrations.crm.hubspot import HubSpotCRMClient
from offerflow.offers.service import OfferService


def get_settings() -> Settings:
    return settings


async def get_crm_client(
    app_settings: Settings = Depends(get_settings),
) -> AsyncGenerator[CRMProvider, None]:
    """Dependency to get an authenticated HubSpot client for one request."""
    async with HubSpotCRMClient(app_settings) as client:
        yield client


def get_offer_service(
    crm: CRMProvider = Depends(get_crm_client),
    app_settings: Settings = Depends(get_settings),
) -> OfferService:
    return OfferService(crm, app_settings)
