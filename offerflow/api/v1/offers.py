from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Request, Response, status

from offerflow.api.deps import get_offer_service, get_settings
from offerflow.core.config import Settings
from offerflow.offers.service import OfferService
from offerflow.schemas import (
    AcceptOfferRequest,
    AdjustOfferRequest,
    ErrorResponse,
    OfferActionResponse,
    OfferRead,
    RejectOfferRequest,
)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    405: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

V1_PATHS = {
    "read": "/deal-data",
    "accept": "/accept",
    "adjust": "/adjust",
    "reject": "/reject",
}
# Paths of the original Cloud Functions, kept for existing offer pages.
LEGACY_PATHS = {
    "read": "/getDealData",
    "accept": "/aceptarOferta",
    "adjust": "/ajustarOferta",
    "reject": "/rechazarOferta",
}


async def read_offer(
    deal_id: str | None = Query(None),
    service: OfferService = Depends(get_offer_service),
) -> OfferRead:
    """Return the offer terms stored on a HubSpot deal."""
    summary = await service.read_offer(deal_id)
    return OfferRead.from_summary(summary)


async def accept_offer(
    body: AcceptOfferRequest | None = None,
    service: OfferService = Depends(get_offer_service),
) -> OfferActionResponse:
    """Move the deal to the decision stage with the offered terms unchanged."""
    body = body or AcceptOfferRequest()
    await service.accept_offer(
        body.deal_id,
        mark_processed=bool(body.marcar_procesado),
        utm_source=body.utm_source,
    )
    return OfferActionResponse(message="Oferta aceptada")


async def adjust_offer(
    body: AdjustOfferRequest | None = None,
    service: OfferService = Depends(get_offer_service),
) -> OfferActionResponse:
    """Store the customer's counter-request and/or the adjusted final terms."""
    body = body or AdjustOfferRequest()
    await service.adjust_offer(
        body.deal_id,
        body.to_adjustment(),
        mark_processed=bool(body.marcar_procesado),
        utm_source=body.utm_source,
    )
    return OfferActionResponse(message="Oferta ajustada correctamente")


async def reject_offer(
    body: RejectOfferRequest | None = None,
    service: OfferService = Depends(get_offer_service),
) -> OfferActionResponse:
    body = body or RejectOfferRequest()
    await service.reject_offer(body.deal_id, utm_source=body.utm_source)
    return OfferActionResponse(message="Oferta rechazada")


async def preflight(
    request: Request,
    app_settings: Settings = Depends(get_settings),
) -> Response:
    """Answer bare OPTIONS requests the way the offer pages expect."""
    origins = app_settings.cors_origins
    origin = request.headers.get("origin")
    if "*" in origins:
        allow_origin = "*"
    elif origin in origins:
        allow_origin = origin
    else:
        allow_origin = None

    headers = {
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }
    if allow_origin:
        headers["Access-Control-Allow-Origin"] = allow_origin
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)


def build_router(paths: dict[str, str], include_in_schema: bool = True) -> APIRouter:
    router = APIRouter()
    router.add_api_route(
        paths["read"],
        read_offer,
        methods=["GET"],
        response_model=OfferRead,
        responses=ERROR_RESPONSES,
        include_in_schema=include_in_schema,
    )
    for name, endpoint in (
        ("accept", accept_offer),
        ("adjust", adjust_offer),
        ("reject", reject_offer),
    ):
        router.add_api_route(
            paths[name],
            endpoint,
            methods=["POST"],
            response_model=OfferActionResponse,
            responses=ERROR_RESPONSES,
            include_in_schema=include_in_schema,
        )
    for path in paths.values():
        router.add_api_route(
            path,
            preflight,
            methods=["OPTIONS"],
            status_code=status.HTTP_204_NO_CONTENT,
            include_in_schema=False,
        )
    return router


router = build_router(V1_PATHS)
legacy_router = build_router(LEGACY_PATHS, include_in_schema=False)
