from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from offerflow.api.v1.health import VERSION
from offerflow.core.config import settings
from offerflow.core.exceptions import OfferError

logger = logging.getLogger(__name__)


def _error_body(message: str, details: object = None) -> dict[str, object]:
    body: dict[str, object] = {"error": message}
    if details is not None:
        body["details"] = details
    return body


async def handle_offer_error(request: Request, exc: OfferError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(_error_body(exc.message, exc.details)),
    )


async def handle_http_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Método no permitido"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(message),
        headers=exc.headers,
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Malformed bodies are client errors like a missing deal_id
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(_error_body("Solicitud inválida", exc.errors())),
    )


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.app_log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=VERSION,
        debug=settings.app_debug,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(OfferError, handle_offer_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_error)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, handle_request_validation_error  # type: ignore[arg-type]
    )

    # Register routes
    from offerflow.api.v1.offers import legacy_router
    from offerflow.api.v1.router import api_v1_router

    app.include_router(api_v1_router, prefix="/api/v1")
    app.include_router(legacy_router)

    logger.info("Offer API ready (env=%s, hubspot=%s)", settings.app_env, settings.hubspot_api_url)
    return app


app = create_app()
