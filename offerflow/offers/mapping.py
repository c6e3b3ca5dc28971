from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from offerflow.offers.normalize import (
    contact_display_name,
    normalize_rate,
    parse_decimal,
    parse_flag,
    parse_integer,
)

DEAL_PROPERTIES = (
    "amount",
    "periodos",
    "pago_por_periodo",
    "tasa_de_interes_semanal",
    "dealname",
    "ajuste_pantalla",
)
DEAL_ASSOCIATIONS = ("contacts",)
CONTACT_PROPERTIES = ("firstname", "lastname")


def _properties(payload: dict[str, Any]) -> dict[str, Any]:
    props = payload.get("properties")
    return props if isinstance(props, dict) else {}


def _first_contact_id(payload: dict[str, Any]) -> str | None:
    associations = payload.get("associations")
    if not isinstance(associations, dict):
        return None
    contacts = associations.get("contacts")
    if not isinstance(contacts, dict):
        return None
    results = contacts.get("results")
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        return None
    contact_id = results[0].get("id")
    return str(contact_id) if contact_id is not None else None


@dataclass(frozen=True)
class DealSnapshot:
    """A HubSpot deal decoded into typed offer terms."""

    deal_id: str
    amount: float
    periods: int
    payment: float
    rate: float
    deal_name: str
    already_processed: bool
    contact_id: str | None = None

    @classmethod
    def from_crm(cls, payload: dict[str, Any], default_rate: float) -> DealSnapshot:
        props = _properties(payload)
        return cls(
            deal_id=str(payload.get("id", "")),
            amount=parse_decimal(props.get("amount")),
            periods=parse_integer(props.get("periodos")),
            payment=parse_decimal(props.get("pago_por_periodo")),
            rate=normalize_rate(props.get("tasa_de_interes_semanal"), default_rate),
            deal_name=str(props.get("dealname") or ""),
            already_processed=parse_flag(props.get("ajuste_pantalla")),
            contact_id=_first_contact_id(payload),
        )


def decode_contact_name(payload: dict[str, Any], fallback: str) -> str:
    props = _properties(payload)
    return contact_display_name(props.get("firstname"), props.get("lastname"), fallback)
