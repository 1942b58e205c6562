"""Data access layer for risk analyses"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from custodia_scoring.infrastructure.database.models import AnalisisRiesgoRecord
from custodia_scoring.domain.models import AnalisisRiesgo


def build_upsert_statement(values: Dict[str, Any]):
    """Postgres INSERT ... ON CONFLICT (servicio_id) DO UPDATE for one analysis row"""
    stmt = pg_insert(AnalisisRiesgoRecord).values(**values)
    updates = {k: stmt.excluded[k] for k in values if k != "servicio_id"}
    updates["updated_at"] = func.now()
    return stmt.on_conflict_do_update(index_elements=["servicio_id"], set_=updates)


class AnalisisRiesgoRepository:
    """Repository for per-service risk analyses"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_servicio(self, servicio_id: str) -> Optional[AnalisisRiesgoRecord]:
        """Fetch the saved analysis for a service"""
        return (
            self.db.query(AnalisisRiesgoRecord)
            .filter(AnalisisRiesgoRecord.servicio_id == servicio_id)
            .populate_existing()
            .first()
        )

    def upsert(self, analisis: AnalisisRiesgo) -> AnalisisRiesgoRecord:
        """Insert or overwrite the analysis for analisis.servicio_id (no history kept)"""
        values = self._values(analisis)

        if self.db.get_bind().dialect.name == "postgresql":
            # Atomic on the unique servicio_id, so concurrent first saves cannot collide
            self.db.execute(build_upsert_statement(values))
            return self.get_by_servicio(analisis.servicio_id)

        record = self.get_by_servicio(analisis.servicio_id)
        if record is None:
            record = AnalisisRiesgoRecord(servicio_id=analisis.servicio_id)
            self.db.add(record)

        for column, value in values.items():
            setattr(record, column, value)

        self.db.flush()
        return record

    @staticmethod
    def _values(analisis: AnalisisRiesgo) -> Dict[str, Any]:
        entrada = analisis.entrada
        return {
            "servicio_id": analisis.servicio_id,
            "nivel_riesgo_cliente": entrada.nivel_riesgo_cliente.value,
            "nivel_riesgo_zona": entrada.nivel_riesgo_zona.value,
            "situacion_financiera": entrada.situacion_financiera.value,
            "antecedentes_verificados": entrada.antecedentes_verificados,
            "referencias_comerciales": entrada.referencias_comerciales,
            "zona_operacion": analisis.zona_operacion,
            "score_riesgo": analisis.score.score,
            "recomendacion": analisis.recomendacion.value,
            "condiciones_especiales": list(analisis.condiciones_especiales),
            "detalles_riesgo": {
                "contribuciones": dict(analisis.score.contribuciones),
                "recomendacion_automatica": analisis.score.recomendacion.value,
            },
            "evaluado_por": analisis.evaluado_por,
            "fecha_evaluacion": datetime.now(timezone.utc),
        }
