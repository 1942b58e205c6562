"""Billing data store client (Supabase PostgREST) for clients, invoices, payments and aging"""

import httpx
from typing import Any, Dict, List, Optional
from custodia_scoring.domain.models import AgingCliente, Cliente, EstadoFactura, Factura, Pago
from custodia_scoring.domain.exceptions import FacturacionAPIError
from custodia_scoring.utils.date_utils import parse_fecha
from custodia_scoring.config import settings


class FacturacionClient:
    """Read-only client for the billing tables behind the credit analysis"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.facturacion_api_base).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.facturacion_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _select(self, table: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Run a PostgREST select and return the rows.

        Raises:
            FacturacionAPIError: On timeout, HTTP errors, or a non-list payload
        """
        async with httpx.AsyncClient(
            timeout=self.timeout, headers=self._headers(), transport=self.transport
        ) as client:
            try:
                response = await client.get(f"{self.base_url}/rest/v1/{table}", params=params)
                response.raise_for_status()
                rows = response.json()
            except httpx.TimeoutException as e:
                raise FacturacionAPIError(f"Billing store timeout after {self.timeout}s on {table}") from e
            except httpx.HTTPStatusError as e:
                raise FacturacionAPIError(f"Billing store error on {table}: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise FacturacionAPIError(f"Billing store unreachable: {e}") from e
            except ValueError as e:
                raise FacturacionAPIError(f"Invalid JSON from billing store on {table}") from e

        if not isinstance(rows, list):
            raise FacturacionAPIError(f"Unexpected payload from billing store on {table}")
        return rows

    async def get_cliente(self, cliente_id: str) -> Optional[Cliente]:
        """Fetch a client record; None if it does not exist"""
        rows = await self._select(
            "pc_clientes",
            {"id": f"eq.{cliente_id}", "select": "id,nombre,limite_credito,dias_credito"},
        )
        if not rows:
            return None

        row = rows[0]
        try:
            limite = row.get("limite_credito")
            return Cliente(
                id=str(row["id"]),
                nombre=row["nombre"],
                limite_credito=float(limite) if limite is not None else None,
                dias_credito=int(row["dias_credito"]) if row.get("dias_credito") is not None else 30,
            )
        except (KeyError, ValueError, TypeError) as e:
            raise FacturacionAPIError(f"Invalid client data from billing store: {e}") from e

    async def get_facturas(self, cliente_id: str) -> List[Factura]:
        """Fetch all non-cancelled invoices for a client"""
        rows = await self._select(
            "facturas",
            {
                "cliente_id": f"eq.{cliente_id}",
                "estado": f"neq.{EstadoFactura.CANCELADA.value}",
                "select": "id,total,fecha_emision,fecha_vencimiento,estado,fecha_pago",
            },
        )
        try:
            return [
                Factura(
                    id=str(row["id"]),
                    total=float(row["total"]),
                    fecha_emision=parse_fecha(row["fecha_emision"]),
                    fecha_vencimiento=parse_fecha(row["fecha_vencimiento"]),
                    estado=EstadoFactura(row.get("estado") or EstadoFactura.EMITIDA.value),
                    fecha_pago=parse_fecha(row["fecha_pago"]) if row.get("fecha_pago") else None,
                )
                for row in rows
            ]
        except (KeyError, ValueError, TypeError) as e:
            raise FacturacionAPIError(f"Invalid invoice data from billing store: {e}") from e

    async def get_pagos_aplicados(self, cliente_id: str, limit: int | None = None) -> List[Pago]:
        """Fetch the most recent applied payments for a client, newest first"""
        rows = await self._select(
            "pagos",
            {
                "cliente_id": f"eq.{cliente_id}",
                "estado": "eq.aplicado",
                "select": "id,monto,fecha_pago",
                "order": "fecha_pago.desc",
                "limit": str(limit or settings.pagos_recientes_limite),
            },
        )
        try:
            return [
                Pago(
                    id=str(row["id"]),
                    monto=float(row["monto"]),
                    fecha_pago=parse_fecha(row["fecha_pago"]),
                )
                for row in rows
            ]
        except (KeyError, ValueError, TypeError) as e:
            raise FacturacionAPIError(f"Invalid payment data from billing store: {e}") from e

    async def get_aging(self, cliente_id: str) -> Optional[AgingCliente]:
        """Fetch the receivables aging aggregate for a client; None if the view has no row"""
        rows = await self._select(
            "vw_aging_cuentas_cobrar",
            {"cliente_id": f"eq.{cliente_id}", "select": "saldo_pendiente,total_vencido"},
        )
        if not rows:
            return None

        row = rows[0]
        try:
            return AgingCliente(
                saldo_pendiente=float(row.get("saldo_pendiente") or 0),
                total_vencido=float(row.get("total_vencido") or 0),
            )
        except (ValueError, TypeError) as e:
            raise FacturacionAPIError(f"Invalid aging data from billing store: {e}") from e
