"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from custodia_scoring.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)


def log_credito_analisis(
    request_id: str,
    cliente_id: str,
    score: int,
    comportamiento: str,
    facturas_vencidas: int,
    duration_ms: float,
) -> None:
    """Log structured credit analysis outcome"""
    logging.info(
        "Credit analysis completed",
        extra={
            "request_id": request_id,
            "cliente_id": cliente_id,
            "step": "credito_analisis",
            "score_crediticio": score,
            "comportamiento": comportamiento,
            "facturas_vencidas": facturas_vencidas,
            "duration_ms": duration_ms,
        },
    )


def log_analisis_riesgo(
    request_id: str,
    servicio_id: str,
    score: float,
    recomendacion: str,
    recomendacion_automatica: str,
) -> None:
    """Log structured risk analysis save, flagging manual overrides"""
    logging.info(
        "Risk analysis saved",
        extra={
            "request_id": request_id,
            "servicio_id": servicio_id,
            "step": "analisis_riesgo_guardado",
            "score_riesgo": score,
            "recomendacion": recomendacion,
            "recomendacion_automatica": recomendacion_automatica,
            "override": recomendacion != recomendacion_automatica,
        },
    )
