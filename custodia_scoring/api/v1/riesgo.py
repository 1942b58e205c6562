"""Service risk analysis endpoints: live score preview, save and fetch"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from custodia_scoring.api.v1.schemas import (
    AnalisisRiesgoRequest,
    AnalisisRiesgoResponse,
    ScoreRiesgoRequest,
    ScoreRiesgoResponse,
)
from custodia_scoring.api.dependencies import get_request_id
from custodia_scoring.infrastructure.database.session import get_db
from custodia_scoring.infrastructure.database.models import AnalisisRiesgoRecord
from custodia_scoring.infrastructure.database.repositories import AnalisisRiesgoRepository
from custodia_scoring.domain.models import AnalisisRiesgo, EntradaRiesgo, Recomendacion
from custodia_scoring.domain.riesgo import (
    calcular_score_riesgo,
    determinar_recomendacion,
    etiquetar_nivel_score,
    validar_analisis,
)
from custodia_scoring.domain.exceptions import AnalisisInvalidoError
from custodia_scoring.infrastructure.observability.metrics import record_analisis_riesgo
from custodia_scoring.infrastructure.observability.logging import log_analisis_riesgo

router = APIRouter()


def _entrada(body: ScoreRiesgoRequest) -> EntradaRiesgo:
    return EntradaRiesgo(
        nivel_riesgo_cliente=body.nivel_riesgo_cliente,
        nivel_riesgo_zona=body.nivel_riesgo_zona,
        situacion_financiera=body.situacion_financiera,
        antecedentes_verificados=body.antecedentes_verificados,
        referencias_comerciales=body.referencias_comerciales,
    )


def _to_response(record: AnalisisRiesgoRecord) -> AnalisisRiesgoResponse:
    detalles = record.detalles_riesgo or {}
    automatica = Recomendacion(
        detalles.get("recomendacion_automatica") or determinar_recomendacion(record.score_riesgo)
    )
    recomendacion = Recomendacion(record.recomendacion)

    return AnalisisRiesgoResponse(
        servicio_id=record.servicio_id,
        nivel_riesgo_cliente=record.nivel_riesgo_cliente,
        nivel_riesgo_zona=record.nivel_riesgo_zona,
        situacion_financiera=record.situacion_financiera,
        antecedentes_verificados=record.antecedentes_verificados,
        referencias_comerciales=record.referencias_comerciales,
        zona_operacion=record.zona_operacion,
        score_riesgo=record.score_riesgo,
        nivel=etiquetar_nivel_score(record.score_riesgo),
        recomendacion=recomendacion,
        recomendacion_automatica=automatica,
        recomendacion_modificada=recomendacion != automatica,
        contribuciones=detalles.get("contribuciones", {}),
        condiciones_especiales=record.condiciones_especiales or [],
        evaluado_por=record.evaluado_por,
        fecha_evaluacion=record.fecha_evaluacion,
    )


@router.post("/analisis-riesgo/score", response_model=ScoreRiesgoResponse)
def preview_score(body: ScoreRiesgoRequest):
    """
    Recompute score and automatic recommendation for the current form values.

    Pure calculation, nothing is persisted. Called on every form change.
    """
    resultado = calcular_score_riesgo(_entrada(body))
    return ScoreRiesgoResponse(
        score_riesgo=resultado.score,
        recomendacion=resultado.recomendacion,
        nivel=etiquetar_nivel_score(resultado.score),
        contribuciones=resultado.contribuciones,
    )


@router.get("/servicios/{servicio_id}/analisis-riesgo", response_model=AnalisisRiesgoResponse)
def get_analisis_riesgo(servicio_id: str, db: Session = Depends(get_db)):
    """Fetch the saved risk analysis for a service"""
    record = AnalisisRiesgoRepository(db).get_by_servicio(servicio_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Risk analysis not found")
    return _to_response(record)


@router.put("/servicios/{servicio_id}/analisis-riesgo", response_model=AnalisisRiesgoResponse)
def save_analisis_riesgo(
    servicio_id: str,
    body: AnalisisRiesgoRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Save (insert or overwrite) the risk analysis of a service.

    The score is always recomputed from the submitted inputs. A recomendacion in
    the body overrides the automatic one; otherwise the automatic one is stored.
    """
    request_id = get_request_id(request)

    try:
        zona_operacion = validar_analisis(body.zona_operacion)
    except AnalisisInvalidoError as e:
        raise HTTPException(status_code=422, detail=str(e))

    entrada = _entrada(body)
    resultado = calcular_score_riesgo(entrada)
    analisis = AnalisisRiesgo(
        servicio_id=servicio_id,
        entrada=entrada,
        zona_operacion=zona_operacion,
        score=resultado,
        recomendacion=body.recomendacion or resultado.recomendacion,
        condiciones_especiales=body.condiciones_especiales,
        evaluado_por=body.evaluado_por,
    )

    try:
        record = AnalisisRiesgoRepository(db).upsert(analisis)
        db.commit()
        db.refresh(record)
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to save risk analysis: {e}", extra={"request_id": request_id, "servicio_id": servicio_id})
        raise HTTPException(status_code=500, detail="Could not save risk analysis")

    record_analisis_riesgo(analisis.recomendacion.value, resultado.recomendacion.value)
    log_analisis_riesgo(
        request_id,
        servicio_id,
        resultado.score,
        analisis.recomendacion.value,
        resultado.recomendacion.value,
    )

    return _to_response(record)
