"""GET /v1/clientes/{cliente_id}/credito - client credit behaviour analysis"""

import asyncio
import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, Request

from custodia_scoring.api.v1.schemas import CreditoAnalisisResponse
from custodia_scoring.api.dependencies import get_facturacion_client, get_request_id
from custodia_scoring.infrastructure.clients.facturacion import FacturacionClient
from custodia_scoring.domain.credito import analizar_credito
from custodia_scoring.domain.exceptions import FacturacionAPIError
from custodia_scoring.infrastructure.observability.metrics import (
    record_credito_analisis,
    facturacion_fetch_failures_counter,
)
from custodia_scoring.infrastructure.observability.logging import log_credito_analisis

router = APIRouter()


@router.get("/clientes/{cliente_id}/credito", response_model=CreditoAnalisisResponse)
async def get_credito_analisis(
    cliente_id: str,
    request: Request,
    facturacion: FacturacionClient = Depends(get_facturacion_client),
):
    """
    Compute a client's credit score and behaviour tier.

    Flow:
    1. Look up the client (404 when absent: no analysis available)
    2. Fetch invoices, applied payments and aging concurrently
    3. Aggregate and score once all three reads have resolved
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        cliente = await facturacion.get_cliente(cliente_id)
        if cliente is None:
            analisis = None
        else:
            # Wait for every read so no failure is left unretrieved, then surface the first
            resultados = await asyncio.gather(
                facturacion.get_facturas(cliente_id),
                facturacion.get_pagos_aplicados(cliente_id),
                facturacion.get_aging(cliente_id),
                return_exceptions=True,
            )
            errores = [r for r in resultados if isinstance(r, BaseException)]
            if errores:
                raise errores[0]
            facturas, pagos, aging = resultados
            analisis = analizar_credito(cliente, facturas, pagos, aging)

    except FacturacionAPIError as e:
        facturacion_fetch_failures_counter.inc()
        logging.error(f"Billing store error: {e}", extra={"request_id": request_id, "cliente_id": cliente_id})
        raise HTTPException(status_code=503, detail="Billing data unavailable")

    if analisis is None:
        logging.info("Client not found", extra={"request_id": request_id, "cliente_id": cliente_id})
        raise HTTPException(status_code=404, detail="No credit analysis available for client")

    duration_ms = (time.time() - start_time) * 1000
    record_credito_analisis(analisis.comportamiento.value)
    log_credito_analisis(
        request_id,
        cliente_id,
        analisis.score_crediticio,
        analisis.comportamiento.value,
        analisis.facturas_vencidas,
        duration_ms,
    )

    return CreditoAnalisisResponse(**asdict(analisis), credito_ilimitado=analisis.credito_ilimitado)
