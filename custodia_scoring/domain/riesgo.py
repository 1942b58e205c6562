"""Service risk scoring - weighted score and approval recommendation for a service request"""

from typing import Optional

from custodia_scoring.domain.exceptions import AnalisisInvalidoError
from custodia_scoring.domain.models import (
    EntradaRiesgo,
    NivelRiesgo,
    Recomendacion,
    ScoreRiesgo,
    SituacionFinanciera,
)

# Client risk tier: max 30 points
PUNTOS_RIESGO_CLIENTE = {
    NivelRiesgo.BAJO: 0,
    NivelRiesgo.MEDIO: 15,
    NivelRiesgo.ALTO: 25,
    NivelRiesgo.MUY_ALTO: 30,
}

# Zone risk tier: max 25 points
PUNTOS_RIESGO_ZONA = {
    NivelRiesgo.BAJO: 0,
    NivelRiesgo.MEDIO: 10,
    NivelRiesgo.ALTO: 20,
    NivelRiesgo.MUY_ALTO: 25,
}

# Financial situation: max 20 points
PUNTOS_SITUACION_FINANCIERA = {
    SituacionFinanciera.ESTABLE: 0,
    SituacionFinanciera.REGULAR: 5,
    SituacionFinanciera.INESTABLE: 15,
    SituacionFinanciera.DESCONOCIDA: 20,
}

# Verifications: 25 points, each completed check removes half
PUNTOS_VERIFICACION = 25.0
CREDITO_POR_VERIFICACION = 12.5


def calcular_score_riesgo(entrada: EntradaRiesgo) -> ScoreRiesgo:
    """
    Calculate service risk score from 0 (lowest risk) to 100 (highest risk).

    Scoring weights:
    - 30: client risk tier
    - 25: zone risk tier
    - 20: financial situation
    - 25: unverified background (12.5) and unverified commercial references (12.5)
    """
    verificacion = PUNTOS_VERIFICACION
    if entrada.antecedentes_verificados:
        verificacion -= CREDITO_POR_VERIFICACION
    if entrada.referencias_comerciales:
        verificacion -= CREDITO_POR_VERIFICACION

    contribuciones = {
        "cliente": float(PUNTOS_RIESGO_CLIENTE[NivelRiesgo(entrada.nivel_riesgo_cliente)]),
        "zona": float(PUNTOS_RIESGO_ZONA[NivelRiesgo(entrada.nivel_riesgo_zona)]),
        "financiera": float(PUNTOS_SITUACION_FINANCIERA[SituacionFinanciera(entrada.situacion_financiera)]),
        "verificacion": verificacion,
    }

    score = max(0.0, min(100.0, sum(contribuciones.values())))

    return ScoreRiesgo(
        score=score,
        recomendacion=determinar_recomendacion(score),
        contribuciones=contribuciones,
    )


def determinar_recomendacion(score: float) -> Recomendacion:
    """
    Map risk score to an approval recommendation.

    - 0-25:  aprobar
    - 25-45: aprobar_con_condiciones
    - 45-70: requiere_revision
    - 70+:   rechazar

    Upper bounds are inclusive. This scale is unrelated to the credit score tiers.
    """
    if score <= 25:
        return Recomendacion.APROBAR
    elif score <= 45:
        return Recomendacion.APROBAR_CON_CONDICIONES
    elif score <= 70:
        return Recomendacion.REQUIERE_REVISION
    else:
        return Recomendacion.RECHAZAR


def etiquetar_nivel_score(score: float) -> NivelRiesgo:
    """Display band for the score badge (quartiles, not the recommendation scale)"""
    if score <= 25:
        return NivelRiesgo.BAJO
    elif score <= 50:
        return NivelRiesgo.MEDIO
    elif score <= 75:
        return NivelRiesgo.ALTO
    else:
        return NivelRiesgo.MUY_ALTO


def validar_analisis(zona_operacion: Optional[str]) -> str:
    """Return the trimmed zone description, or raise if it is blank"""
    zona = (zona_operacion or "").strip()
    if not zona:
        raise AnalisisInvalidoError("zona_operacion is required")
    return zona
