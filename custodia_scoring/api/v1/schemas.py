"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from typing import Dict, List, Optional

from custodia_scoring.domain.models import (
    Comportamiento,
    NivelRiesgo,
    Recomendacion,
    SituacionFinanciera,
)


class CreditoAnalisisResponse(BaseModel):
    """Response for GET /v1/clientes/{cliente_id}/credito"""

    cliente_id: str
    cliente_nombre: str
    dias_credito: int
    saldo_actual: float
    limite_credito: Optional[float] = Field(None, description="null = no credit ceiling")
    credito_ilimitado: bool
    credito_disponible: float = Field(..., description="-1 when the client has no credit ceiling")
    credito_utilizado_pct: int
    facturas_pendientes: int
    facturas_vencidas: int
    total_vencido: float
    dias_promedio_pago: int
    historial_pagos_30d: float
    historial_pagos_60d: float
    historial_pagos_90d: float
    ultimo_pago_fecha: Optional[date] = None
    ultimo_pago_monto: Optional[float] = None
    score_crediticio: int = Field(..., ge=0, le=100)
    comportamiento: Comportamiento


class ScoreRiesgoRequest(BaseModel):
    """Scored inputs of the risk assessment form; defaults match a blank form"""

    nivel_riesgo_cliente: NivelRiesgo = NivelRiesgo.MEDIO
    nivel_riesgo_zona: NivelRiesgo = NivelRiesgo.MEDIO
    situacion_financiera: SituacionFinanciera = SituacionFinanciera.DESCONOCIDA
    antecedentes_verificados: bool = False
    referencias_comerciales: bool = False


class ScoreRiesgoResponse(BaseModel):
    """Response for POST /v1/analisis-riesgo/score"""

    score_riesgo: float
    recomendacion: Recomendacion
    nivel: NivelRiesgo
    contribuciones: Dict[str, float]


class AnalisisRiesgoRequest(ScoreRiesgoRequest):
    """Request body for PUT /v1/servicios/{servicio_id}/analisis-riesgo"""

    model_config = ConfigDict(str_strip_whitespace=True)

    zona_operacion: str = Field(..., min_length=1, description="Description of the operating zone")
    recomendacion: Optional[Recomendacion] = Field(
        None, description="Reviewer override; the automatic recommendation is stored when omitted"
    )
    condiciones_especiales: List[str] = Field(default_factory=list)
    evaluado_por: Optional[str] = None


class AnalisisRiesgoResponse(BaseModel):
    """Saved risk analysis of a service"""

    servicio_id: str
    nivel_riesgo_cliente: NivelRiesgo
    nivel_riesgo_zona: NivelRiesgo
    situacion_financiera: SituacionFinanciera
    antecedentes_verificados: bool
    referencias_comerciales: bool
    zona_operacion: str
    score_riesgo: float
    nivel: NivelRiesgo
    recomendacion: Recomendacion
    recomendacion_automatica: Recomendacion
    recomendacion_modificada: bool
    contribuciones: Dict[str, float]
    condiciones_especiales: List[str]
    evaluado_por: Optional[str] = None
    fecha_evaluacion: Optional[datetime] = None
