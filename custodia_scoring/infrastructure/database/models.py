"""SQLAlchemy ORM models for persisted risk analyses"""

import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime, Text, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class AnalisisRiesgoRecord(Base):
    """Security risk analysis of a service request, one row per service"""

    __tablename__ = "analisis_riesgo"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    servicio_id = Column(Text, nullable=False, unique=True, index=True)
    nivel_riesgo_cliente = Column(String(16), nullable=False)
    nivel_riesgo_zona = Column(String(16), nullable=False)
    situacion_financiera = Column(String(16), nullable=False)
    antecedentes_verificados = Column(Boolean, nullable=False, default=False)
    referencias_comerciales = Column(Boolean, nullable=False, default=False)
    zona_operacion = Column(Text, nullable=False)
    score_riesgo = Column(Float, nullable=False)
    recomendacion = Column(String(32), nullable=False)
    condiciones_especiales = Column(JSON, nullable=False, default=list)
    detalles_riesgo = Column(JSON, nullable=True)
    evaluado_por = Column(Text, nullable=True)
    fecha_evaluacion = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
