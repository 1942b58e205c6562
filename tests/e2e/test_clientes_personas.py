"""
E2E tests for client personas against the mock billing store.

These tests require the mock billing server on FACTURACION_API_BASE:
    uvicorn mock.facturacion_server.main:app --port 8001

Client personas:
- cli_puntual: pays in ~20 days, low utilization, excelente expected
- cli_moroso: 95% utilization, one overdue invoice, pays in ~50 days, regular expected
- cli_sin_limite: no credit ceiling, unlimited sentinel expected
"""

import pytest
from fastapi.testclient import TestClient


@pytest.mark.integration
def test_cli_puntual_excelente(client: TestClient):
    response = client.get("/v1/clientes/cli_puntual/credito")

    assert response.status_code == 200
    data = response.json()
    assert data["comportamiento"] == "excelente"
    assert data["credito_utilizado_pct"] == 10
    assert data["dias_promedio_pago"] == 20
    # Cancelled invoice F-104 must not count toward pending
    assert data["facturas_pendientes"] == 1


@pytest.mark.integration
def test_cli_moroso_regular(client: TestClient):
    response = client.get("/v1/clientes/cli_moroso/credito")

    assert response.status_code == 200
    data = response.json()
    assert data["score_crediticio"] == 55
    assert data["comportamiento"] == "regular"
    assert data["facturas_vencidas"] == 1
    assert data["credito_utilizado_pct"] == 95


@pytest.mark.integration
def test_cli_sin_limite_unlimited(client: TestClient):
    response = client.get("/v1/clientes/cli_sin_limite/credito")

    assert response.status_code == 200
    data = response.json()
    assert data["credito_ilimitado"] is True
    assert data["credito_disponible"] == -1
    assert data["credito_utilizado_pct"] == 0


@pytest.mark.integration
def test_unknown_client_has_no_analysis(client: TestClient):
    response = client.get("/v1/clientes/cli_inexistente/credito")
    assert response.status_code == 404
