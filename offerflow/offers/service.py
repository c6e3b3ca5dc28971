from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Final

from offerflow.core.config import Settings
from offerflow.core.exceptions import (
    CRMRequestError,
    OfferValidationError,
    UpstreamError,
)
from offerflow.integrations.crm.base import CRMProvider
from offerflow.offers.mapping import (
    CONTACT_PROPERTIES,
    DEAL_ASSOCIATIONS,
    DEAL_PROPERTIES,
    DealSnapshot,
    decode_contact_name,
)
from offerflow.offers.patch import DealPatch

logger = logging.getLogger(__name__)

READ_ERROR = "Error al obtener datos de HubSpot"
WRITE_ERROR = "Error al actualizar HubSpot"
MISSING_DEAL_ID = "deal_id es requerido"

PROCESSED_FLAG = "ajuste_pantalla"


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final[Any] = _Unset()


@dataclass(frozen=True)
class OfferSummary:
    name: str
    amount: float
    periods: int
    payment: float
    rate: float
    deal_name: str
    already_processed: bool


@dataclass(frozen=True)
class OfferAdjustment:
    """Counter-request and final terms of an adjusted offer.

    Fields left as ``UNSET`` were not supplied by the caller and are not
    written. Values are passed to the CRM verbatim.
    """

    requested_amount: Any = UNSET
    requested_periods: Any = UNSET
    approved_amount: Any = UNSET
    final_periods: Any = UNSET
    final_payment: Any = UNSET

    def supplied(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


def _require_deal_id(deal_id: str | None) -> str:
    if deal_id is None or not deal_id.strip():
        raise OfferValidationError(MISSING_DEAL_ID)
    return deal_id.strip()


class OfferService:
    """Reads offer terms from HubSpot deals and records customer decisions."""

    def __init__(self, crm: CRMProvider, settings: Settings) -> None:
        self.crm = crm
        self.settings = settings

    def _adjustment_targets(self) -> dict[str, str]:
        return {
            "requested_amount": "nuevo_monto_solicitado",
            "requested_periods": self.settings.requested_periods_property,
            "approved_amount": "amount",
            "final_periods": "periodos",
            "final_payment": "pago_por_periodo",
        }

    async def read_offer(self, deal_id: str | None) -> OfferSummary:
        """Fetch a deal and its first associated contact as a normalized offer."""
        deal_id = _require_deal_id(deal_id)
        try:
            payload = await self.crm.get_deal(
                deal_id, DEAL_PROPERTIES, associations=DEAL_ASSOCIATIONS
            )
            deal = DealSnapshot.from_crm(payload, self.settings.default_weekly_rate)

            name = self.settings.default_contact_name
            if deal.contact_id is not None:
                contact = await self.crm.get_contact(deal.contact_id, CONTACT_PROPERTIES)
                name = decode_contact_name(contact, self.settings.default_contact_name)
        except CRMRequestError as exc:
            logger.error("Error reading deal %s from HubSpot: %s", deal_id, exc.details)
            raise UpstreamError(READ_ERROR, details=exc.details) from exc

        return OfferSummary(
            name=name,
            amount=deal.amount,
            periods=deal.periods,
            payment=deal.payment,
            rate=deal.rate,
            deal_name=deal.deal_name,
            already_processed=deal.already_processed,
        )

    def _decision_patch(self) -> DealPatch:
        return DealPatch().set("dealstage", self.settings.offer_decision_stage)

    async def accept_offer(
        self,
        deal_id: str | None,
        mark_processed: bool = False,
        utm_source: str | None = None,
    ) -> None:
        """Record acceptance of the offered terms as they are."""
        deal_id = _require_deal_id(deal_id)
        patch = self._decision_patch()
        patch.set_if(mark_processed, PROCESSED_FLAG, "true")
        patch.set_if(bool(utm_source), "utm_source", utm_source)
        await self._apply(deal_id, patch)

    async def adjust_offer(
        self,
        deal_id: str | None,
        changes: OfferAdjustment,
        mark_processed: bool = False,
        utm_source: str | None = None,
    ) -> None:
        """Record a counter-request and/or the finally approved terms."""
        deal_id = _require_deal_id(deal_id)
        patch = self._decision_patch()
        targets = self._adjustment_targets()
        for field_name, value in changes.supplied().items():
            patch.set(targets[field_name], value)
        patch.set_if(mark_processed, PROCESSED_FLAG, "true")
        patch.set_if(bool(utm_source), "utm_source", utm_source)
        await self._apply(deal_id, patch)

    async def reject_offer(
        self, deal_id: str | None, utm_source: str | None = None
    ) -> None:
        """Record a rejection. Stage and processed flag stay as they are."""
        deal_id = _require_deal_id(deal_id)
        patch = DealPatch().set_if(bool(utm_source), "utm_source", utm_source)
        await self._apply(deal_id, patch)

    async def _apply(self, deal_id: str, patch: DealPatch) -> None:
        try:
            await self.crm.update_deal(deal_id, patch.properties())
        except CRMRequestError as exc:
            logger.error("Error updating deal %s in HubSpot: %s", deal_id, exc.details)
            raise UpstreamError(WRITE_ERROR, details=exc.details) from exc
        logger.info("Updated deal %s: %s", deal_id, ", ".join(patch.names()) or "(no properties)")
