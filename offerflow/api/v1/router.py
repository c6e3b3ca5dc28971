from __future__ import annotations

from fastapi import APIRouter

from offerflow.api.v1 import health, offers

api_v1_router = APIRouter()

api_v1_router.include_router(health.router, tags=["Health"])
api_v1_router.include_router(offers.router, prefix="/offers", tags=["Offers"])
