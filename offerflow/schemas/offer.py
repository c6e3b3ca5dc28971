from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from offerflow.offers.service import UNSET, OfferAdjustment, OfferSummary

# Counter-request and final terms go to the CRM as sent.
PassThrough = str | int | float | None


class OfferRead(BaseModel):
    nombre: str
    monto: float
    periodos: int
    pago: float
    tasa: float
    dealName: str
    yaProcesado: bool

    @classmethod
    def from_summary(cls, summary: OfferSummary) -> OfferRead:
        return cls(
            nombre=summary.name,
            monto=summary.amount,
            periodos=summary.periods,
            pago=summary.payment,
            tasa=summary.rate,
            dealName=summary.deal_name,
            yaProcesado=summary.already_processed,
        )


class OfferRequest(BaseModel):
    # deal_id stays optional so a missing id is reported as "deal_id es requerido"
    model_config = ConfigDict(coerce_numbers_to_str=True)

    deal_id: str | None = None
    utm_source: str | None = None


class AcceptOfferRequest(OfferRequest):
    marcar_procesado: bool | None = None


class AdjustOfferRequest(OfferRequest):
    nuevo_monto_solicitado: PassThrough = None
    plazos_solicitados: PassThrough = None
    monto_aprobado: PassThrough = None
    periodos_finales: PassThrough = None
    pago_final: PassThrough = None
    marcar_procesado: bool | None = None

    def to_adjustment(self) -> OfferAdjustment:
        """Only fields present in the request body become part of the update."""
        sent = self.model_fields_set

        def pick(name: str) -> Any:
            return getattr(self, name) if name in sent else UNSET

        return OfferAdjustment(
            requested_amount=pick("nuevo_monto_solicitado"),
            requested_periods=pick("plazos_solicitados"),
            approved_amount=pick("monto_aprobado"),
            final_periods=pick("periodos_finales"),
            final_payment=pick("pago_final"),
        )


class RejectOfferRequest(OfferRequest):
    pass


class OfferActionResponse(BaseModel):
    success: bool = True
    message: str
