from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from offerflow.core.exceptions import CRMRequestError

STAGE = "34528397"

DEAL = {
    "id": "123",
    "properties": {
        "amount": "10000",
        "periodos": "12",
        "pago_por_periodo": "950.5",
        "tasa_de_interes_semanal": "2.5",
        "dealname": "Oferta Luis",
        "ajuste_pantalla": "true",
    },
    "associations": {"contacts": {"results": [{"id": "501", "type": "deal_to_contact"}]}},
}
CONTACT = {"id": "501", "properties": {"firstname": "Luis", "lastname": "Pérez"}}


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/v1/offers/deal-data", "/getDealData"])
async def test_read_offer(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock, path: str
) -> None:
    mock_crm.get_deal.return_value = DEAL
    mock_crm.get_contact.return_value = CONTACT

    response = await client.get(path, params={"deal_id": "123"})

    assert response.status_code == 200
    assert response.json() == {
        "nombre": "Luis Pérez",
        "monto": 10000.0,
        "periodos": 12,
        "pago": 950.5,
        "tasa": pytest.approx(0.025),
        "dealName": "Oferta Luis",
        "yaProcesado": True,
    }


@pytest.mark.asyncio
async def test_read_offer_missing_deal_id(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock
) -> None:
    response = await client.get("/api/v1/offers/deal-data")

    assert response.status_code == 400
    assert response.json() == {"error": "deal_id es requerido"}
    mock_crm.get_deal.assert_not_awaited()


@pytest.mark.asyncio
async def test_read_offer_upstream_failure(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock
) -> None:
    mock_crm.get_deal.side_effect = CRMRequestError(401, {"category": "INVALID_AUTHENTICATION"})

    response = await client.get("/api/v1/offers/deal-data", params={"deal_id": "123"})

    assert response.status_code == 500
    assert response.json() == {
        "error": "Error al obtener datos de HubSpot",
        "details": {"category": "INVALID_AUTHENTICATION"},
    }


@pytest.mark.asyncio
async def test_accept_offer(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock
) -> None:
    response = await client.post(
        "/api/v1/offers/accept",
        json={"deal_id": 123, "marcar_procesado": True, "utm_source": "whatsapp"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Oferta aceptada"}
    mock_crm.update_deal.assert_awaited_once_with(
        "123", {"dealstage": STAGE, "ajuste_pantalla": "true", "utm_source": "whatsapp"}
    )


@pytest.mark.asyncio
async def test_adjust_offer_partial_fields(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock
) -> None:
    response = await client.post(
        "/ajustarOferta",
        json={"deal_id": "123", "monto_aprobado": 8000, "pago_final": 700.5},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Oferta ajustada correctamente"}
    mock_crm.update_deal.assert_awaited_once_with(
        "123", {"dealstage": STAGE, "amount": 8000, "pago_por_periodo": 700.5}
    )


@pytest.mark.asyncio
async def test_adjust_offer_explicit_null_is_forwarded(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock
) -> None:
    response = await client.post(
        "/api/v1/offers/adjust",
        json={"deal_id": "123", "nuevo_monto_solicitado": "9000", "plazos_solicitados": None},
    )

    assert response.status_code == 200
    mock_crm.update_deal.assert_awaited_once_with(
        "123",
        {"dealstage": STAGE, "nuevo_monto_solicitado": "9000", "plazos_solcitados": None},
    )


@pytest.mark.asyncio
async def test_reject_offer(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock
) -> None:
    response = await client.post("/rechazarOferta", json={"deal_id": "123"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Oferta rechazada"}
    mock_crm.update_deal.assert_awaited_once_with("123", {})


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path", ["/api/v1/offers/accept", "/api/v1/offers/adjust", "/api/v1/offers/reject"]
)
async def test_mutations_require_deal_id(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock, path: str
) -> None:
    response = await client.post(path, json={"utm_source": "email"})

    assert response.status_code == 400
    assert response.json() == {"error": "deal_id es requerido"}
    mock_crm.update_deal.assert_not_awaited()


@pytest.mark.asyncio
async def test_mutation_without_body(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock
) -> None:
    response = await client.post("/aceptarOferta")

    assert response.status_code == 400
    assert response.json() == {"error": "deal_id es requerido"}


@pytest.mark.asyncio
async def test_mutation_with_invalid_flag(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock
) -> None:
    response = await client.post(
        "/api/v1/offers/accept", json={"deal_id": "123", "marcar_procesado": "quizas"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Solicitud inválida"
    mock_crm.update_deal.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_failure_returns_upstream_details(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock
) -> None:
    mock_crm.update_deal.side_effect = CRMRequestError(404, {"message": "Object not found"})

    response = await client.post("/api/v1/offers/reject", json={"deal_id": "999"})

    assert response.status_code == 500
    assert response.json() == {
        "error": "Error al actualizar HubSpot",
        "details": {"message": "Object not found"},
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/v1/offers/accept", "/rechazarOferta"])
async def test_wrong_method_is_rejected(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock, path: str
) -> None:
    response = await client.get(path)

    assert response.status_code == 405
    assert response.json() == {"error": "Método no permitido"}
    mock_crm.update_deal.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/v1/offers/deal-data", "/aceptarOferta"])
async def test_bare_options_preflight(client: AsyncClient, path: str) -> None:
    response = await client.options(path)

    assert response.status_code == 204
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


@pytest.mark.asyncio
async def test_cors_preflight(client: AsyncClient) -> None:
    response = await client.options(
        "/api/v1/offers/accept",
        headers={
            "Origin": "https://ofertas.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/aceptarOferta", "/api/v1/offers/adjust"])
async def test_null_processed_flag_is_treated_as_false(
    client: AsyncClient, override_get_crm_client: None, mock_crm: AsyncMock, path: str
) -> None:
    response = await client.post(path, json={"deal_id": "123", "marcar_procesado": None})

    assert response.status_code == 200
    mock_crm.update_deal.assert_awaited_once_with("123", {"dealstage": STAGE})
