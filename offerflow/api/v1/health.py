from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from offerflow.api.deps import get_crm_client
from offerflow.core.exceptions import CRMRequestError
from offerflow.integrations.crm.base import CRMProvider
from offerflow.schemas import DependencyHealth, HealthCheckResponse

router = APIRouter()

VERSION = "0.1.0"


async def _check_hubspot(crm: CRMProvider) -> DependencyHealth:
    start = time.monotonic()
    try:
        await crm.ping()
    except CRMRequestError as exc:
        return DependencyHealth(name="hubspot", status="error", message=str(exc))
    latency = (time.monotonic() - start) * 1000
    return DependencyHealth(name="hubspot", status="ok", latency_ms=round(latency, 2))


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(
    crm: CRMProvider = Depends(get_crm_client),
) -> HealthCheckResponse:
    """Report whether HubSpot accepts the configured token."""
    hubspot = await _check_hubspot(crm)
    return HealthCheckResponse(
        status="ok" if hubspot.status == "ok" else "degraded",
        version=VERSION,
        dependencies={"hubspot": hubspot},
    )
