"""Client credit scoring - behavioural score from invoice aging and payment history"""

import math
from datetime import date
from typing import List, Optional

from custodia_scoring.domain.models import (
    CREDITO_ILIMITADO,
    AgingCliente,
    Cliente,
    ClienteCreditoAnalisis,
    Comportamiento,
    EstadoFactura,
    Factura,
    Pago,
)
from custodia_scoring.utils.date_utils import dias_entre, en_ventana

ESTADOS_ABIERTOS = {EstadoFactura.EMITIDA, EstadoFactura.PENDIENTE, EstadoFactura.PARCIAL}

PENALIZACION_POR_VENCIDA = 15
BONO_PAGO_RECIENTE = 5


def _redondear(valor: float) -> int:
    """Round half up, the way the billing UI rounds percentages and day counts"""
    return int(math.floor(valor + 0.5))


def calcular_utilizacion(saldo_actual: float, limite_credito: Optional[float]) -> int:
    """Credit utilization as a whole percentage; 0 when there is no usable limit"""
    if not limite_credito:
        return 0
    return _redondear(saldo_actual / limite_credito * 100)


def calcular_credito_disponible(limite_credito: Optional[float], saldo_actual: float) -> float:
    """Remaining credit, or CREDITO_ILIMITADO when the client has no ceiling"""
    if limite_credito is None:
        return CREDITO_ILIMITADO
    return round(max(0.0, limite_credito - saldo_actual), 2)


def calcular_score_crediticio(
    facturas_vencidas: int,
    credito_utilizado_pct: int,
    dias_promedio_pago: int,
    historial_pagos_30d: float,
) -> int:
    """
    Calculate the behavioural credit score from 0 (worst) to 100 (best).

    Starts at 100 and applies:
    - -15 per overdue invoice (uncapped)
    - utilization: >90% -20, >70% -10
    - average days to pay: >60 -20, >45 -10, >30 -5
    - +5 if any payment was applied in the trailing 30 days

    Only one bracket applies per factor. Result is clamped to [0, 100].
    """
    score = 100

    score -= PENALIZACION_POR_VENCIDA * facturas_vencidas

    if credito_utilizado_pct > 90:
        score -= 20
    elif credito_utilizado_pct > 70:
        score -= 10

    if dias_promedio_pago > 60:
        score -= 20
    elif dias_promedio_pago > 45:
        score -= 10
    elif dias_promedio_pago > 30:
        score -= 5

    if historial_pagos_30d > 0:
        score += BONO_PAGO_RECIENTE

    return max(0, min(100, score))


def clasificar_comportamiento(score: int) -> Comportamiento:
    """
    Map credit score to a behaviour tier.

    - 85+:   excelente
    - 70-84: bueno
    - 50-69: regular
    - <50:   riesgoso
    """
    if score >= 85:
        return Comportamiento.EXCELENTE
    elif score >= 70:
        return Comportamiento.BUENO
    elif score >= 50:
        return Comportamiento.REGULAR
    else:
        return Comportamiento.RIESGOSO


def _es_vencida(factura: Factura, hoy: date) -> bool:
    if factura.estado == EstadoFactura.VENCIDA:
        return True
    return factura.estado in ESTADOS_ABIERTOS and factura.fecha_vencimiento < hoy


def analizar_credito(
    cliente: Cliente,
    facturas: List[Factura],
    pagos: List[Pago],
    aging: Optional[AgingCliente],
    hoy: Optional[date] = None,
) -> ClienteCreditoAnalisis:
    """
    Aggregate a client's invoices and payments into a credit analysis.

    Cancelled invoices are ignored everywhere. An open invoice past its due date
    counts as overdue even if its stored state was not updated yet.
    The current balance comes from the aging view when available since it
    accounts for partial payments.
    """
    if hoy is None:
        hoy = date.today()

    vigentes = [f for f in facturas if f.estado != EstadoFactura.CANCELADA]

    vencidas = [f for f in vigentes if _es_vencida(f, hoy)]
    pendientes = [f for f in vigentes if f.estado in ESTADOS_ABIERTOS and not _es_vencida(f, hoy)]

    if aging is not None:
        saldo_actual = aging.saldo_pendiente
        total_vencido = aging.total_vencido
    else:
        saldo_actual = sum(f.total for f in pendientes) + sum(f.total for f in vencidas)
        total_vencido = sum(f.total for f in vencidas)

    # Average days between issue and payment over fully paid invoices
    dias_pago = [
        dias_entre(f.fecha_emision, f.fecha_pago)
        for f in vigentes
        if f.estado == EstadoFactura.PAGADA and f.fecha_pago is not None
    ]
    dias_promedio_pago = _redondear(sum(dias_pago) / len(dias_pago)) if dias_pago else 0

    historial = {
        dias: round(sum(p.monto for p in pagos if en_ventana(p.fecha_pago, hoy, dias)), 2)
        for dias in (30, 60, 90)
    }

    ultimo_pago = max(pagos, key=lambda p: p.fecha_pago) if pagos else None

    credito_utilizado_pct = calcular_utilizacion(saldo_actual, cliente.limite_credito)
    score = calcular_score_crediticio(
        facturas_vencidas=len(vencidas),
        credito_utilizado_pct=credito_utilizado_pct,
        dias_promedio_pago=dias_promedio_pago,
        historial_pagos_30d=historial[30],
    )

    return ClienteCreditoAnalisis(
        cliente_id=cliente.id,
        cliente_nombre=cliente.nombre,
        dias_credito=cliente.dias_credito,
        saldo_actual=round(saldo_actual, 2),
        limite_credito=cliente.limite_credito,
        credito_disponible=calcular_credito_disponible(cliente.limite_credito, saldo_actual),
        credito_utilizado_pct=credito_utilizado_pct,
        facturas_pendientes=len(pendientes),
        facturas_vencidas=len(vencidas),
        total_vencido=round(total_vencido, 2),
        dias_promedio_pago=dias_promedio_pago,
        historial_pagos_30d=historial[30],
        historial_pagos_60d=historial[60],
        historial_pagos_90d=historial[90],
        ultimo_pago_fecha=ultimo_pago.fecha_pago if ultimo_pago else None,
        ultimo_pago_monto=ultimo_pago.monto if ultimo_pago else None,
        score_crediticio=score,
        comportamiento=clasificar_comportamiento(score),
    )
