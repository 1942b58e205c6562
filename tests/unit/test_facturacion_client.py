"""Unit tests for the billing data store client"""

import httpx
import pytest
from datetime import date
from custodia_scoring.domain.models import EstadoFactura
from custodia_scoring.domain.exceptions import FacturacionAPIError
from custodia_scoring.infrastructure.clients.facturacion import FacturacionClient


def make_client(handler) -> FacturacionClient:
    return FacturacionClient(
        base_url="http://facturacion.test",
        api_key="anon-key",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_get_cliente_parses_row_and_sends_auth_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["apikey"] = request.headers.get("apikey")
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(
            200,
            json=[{"id": "cli_1", "nombre": "Transportes", "limite_credito": "15000.50", "dias_credito": 45}],
        )

    cliente = await make_client(handler).get_cliente("cli_1")

    assert seen["path"] == "/rest/v1/pc_clientes"
    assert seen["params"]["id"] == "eq.cli_1"
    assert seen["apikey"] == "anon-key"
    assert seen["auth"] == "Bearer anon-key"
    assert cliente.limite_credito == 15000.50
    assert cliente.dias_credito == 45


@pytest.mark.asyncio
async def test_get_cliente_missing_returns_none():
    client = make_client(lambda request: httpx.Response(200, json=[]))
    assert await client.get_cliente("nope") is None


@pytest.mark.asyncio
async def test_get_cliente_null_limit_means_unlimited():
    row = {"id": "cli_1", "nombre": "Sin Limite", "limite_credito": None, "dias_credito": None}
    cliente = await make_client(lambda request: httpx.Response(200, json=[row])).get_cliente("cli_1")

    assert cliente.limite_credito is None
    assert cliente.dias_credito == 30


@pytest.mark.asyncio
async def test_get_cliente_cash_terms_keeps_zero_days():
    """A client on cash terms (0 credit days, 0 limit) must not pick up the 30 day default"""
    row = {"id": "cli_contado", "nombre": "Contado", "limite_credito": 0, "dias_credito": 0}
    cliente = await make_client(lambda request: httpx.Response(200, json=[row])).get_cliente("cli_contado")

    assert cliente.dias_credito == 0
    assert cliente.limite_credito == 0.0


@pytest.mark.asyncio
async def test_get_facturas_excludes_cancelled_and_parses_dates():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(
            200,
            json=[
                {
                    "id": "F-1",
                    "total": 1160.0,
                    "fecha_emision": "2025-03-01",
                    "fecha_vencimiento": "2025-03-31",
                    "estado": "pagada",
                    "fecha_pago": "2025-03-20T18:30:00+00:00",
                },
                {
                    "id": "F-2",
                    "total": 500,
                    "fecha_emision": "2025-04-01",
                    "fecha_vencimiento": "2025-05-01",
                    "estado": None,
                    "fecha_pago": None,
                },
            ],
        )

    facturas = await make_client(handler).get_facturas("cli_1")

    assert seen["params"]["estado"] == "neq.cancelada"
    assert facturas[0].fecha_pago == date(2025, 3, 20)
    assert facturas[0].estado == EstadoFactura.PAGADA
    assert facturas[1].estado == EstadoFactura.EMITIDA
    assert facturas[1].fecha_pago is None


@pytest.mark.asyncio
async def test_get_pagos_requests_recent_applied_payments():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[{"id": 7, "monto": "2500", "fecha_pago": "2025-06-01"}])

    pagos = await make_client(handler).get_pagos_aplicados("cli_1")

    assert seen["params"]["estado"] == "eq.aplicado"
    assert seen["params"]["order"] == "fecha_pago.desc"
    assert seen["params"]["limit"] == "50"
    assert pagos[0].id == "7"
    assert pagos[0].monto == 2500.0


@pytest.mark.asyncio
async def test_get_aging_missing_row_returns_none():
    client = make_client(lambda request: httpx.Response(200, json=[]))
    assert await client.get_aging("cli_1") is None


@pytest.mark.asyncio
async def test_http_error_raises_domain_error():
    client = make_client(lambda request: httpx.Response(500, json={"message": "boom"}))
    with pytest.raises(FacturacionAPIError):
        await client.get_facturas("cli_1")


@pytest.mark.asyncio
async def test_timeout_raises_domain_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(FacturacionAPIError, match="timeout"):
        await make_client(handler).get_cliente("cli_1")


@pytest.mark.asyncio
async def test_malformed_rows_rejected_at_boundary():
    row = {"id": "F-1", "total": "not-a-number", "fecha_emision": "2025-03-01", "fecha_vencimiento": "2025-03-31"}
    client = make_client(lambda request: httpx.Response(200, json=[row]))

    with pytest.raises(FacturacionAPIError):
        await client.get_facturas("cli_1")


@pytest.mark.asyncio
async def test_unknown_invoice_state_rejected():
    row = {
        "id": "F-1",
        "total": 10,
        "fecha_emision": "2025-03-01",
        "fecha_vencimiento": "2025-03-31",
        "estado": "borrador",
    }
    client = make_client(lambda request: httpx.Response(200, json=[row]))

    with pytest.raises(FacturacionAPIError):
        await client.get_facturas("cli_1")
