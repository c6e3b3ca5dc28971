from __future__ import annotations

from .common import ErrorResponse
from .health import DependencyHealth, HealthCheckResponse
from .offer import (
    AcceptOfferRequest,
    AdjustOfferRequest,
    OfferActionResponse,
    OfferRead,
    RejectOfferRequest,
)

__all__ = [
    # common
    "ErrorResponse",
    # health
    "DependencyHealth",
    "HealthCheckResponse",
    # offer
    "AcceptOfferRequest",
    "AdjustOfferRequest",
    "OfferActionResponse",
    "OfferRead",
    "RejectOfferRequest",
]
