"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional


# Sentinel for credito_disponible when the client has no credit ceiling.
# Callers must check for it before doing arithmetic.
CREDITO_ILIMITADO = -1


class EstadoFactura(str, Enum):
    EMITIDA = "emitida"
    PENDIENTE = "pendiente"
    PARCIAL = "parcial"
    VENCIDA = "vencida"
    PAGADA = "pagada"
    CANCELADA = "cancelada"


class Comportamiento(str, Enum):
    """Payment behaviour tier derived from the credit score"""

    EXCELENTE = "excelente"
    BUENO = "bueno"
    REGULAR = "regular"
    RIESGOSO = "riesgoso"


class NivelRiesgo(str, Enum):
    BAJO = "bajo"
    MEDIO = "medio"
    ALTO = "alto"
    MUY_ALTO = "muy_alto"


class SituacionFinanciera(str, Enum):
    ESTABLE = "estable"
    REGULAR = "regular"
    INESTABLE = "inestable"
    DESCONOCIDA = "desconocida"


class Recomendacion(str, Enum):
    """Approval recommendation for a service request"""

    APROBAR = "aprobar"
    APROBAR_CON_CONDICIONES = "aprobar_con_condiciones"
    REQUIERE_REVISION = "requiere_revision"
    RECHAZAR = "rechazar"


@dataclass
class Cliente:
    """Billing client record"""

    id: str
    nombre: str
    limite_credito: Optional[float]  # None = no ceiling
    dias_credito: int = 30


@dataclass
class Factura:
    """Invoice issued to a client"""

    id: str
    total: float
    fecha_emision: date
    fecha_vencimiento: date
    estado: EstadoFactura
    fecha_pago: Optional[date] = None


@dataclass
class Pago:
    """Applied payment received from a client"""

    id: str
    monto: float
    fecha_pago: date


@dataclass
class AgingCliente:
    """Accounts-receivable aging aggregate for one client"""

    saldo_pendiente: float
    total_vencido: float


@dataclass
class ClienteCreditoAnalisis:
    """Credit behaviour analysis for a client, computed per request"""

    cliente_id: str
    cliente_nombre: str
    dias_credito: int
    saldo_actual: float
    limite_credito: Optional[float]
    credito_disponible: float  # CREDITO_ILIMITADO when limite_credito is None
    credito_utilizado_pct: int
    facturas_pendientes: int
    facturas_vencidas: int
    total_vencido: float
    dias_promedio_pago: int
    historial_pagos_30d: float
    historial_pagos_60d: float
    historial_pagos_90d: float
    ultimo_pago_fecha: Optional[date]
    ultimo_pago_monto: Optional[float]
    score_crediticio: int
    comportamiento: Comportamiento

    @property
    def credito_ilimitado(self) -> bool:
        return self.limite_credito is None


@dataclass(frozen=True)
class EntradaRiesgo:
    """Scored inputs of a service risk assessment form"""

    nivel_riesgo_cliente: NivelRiesgo = NivelRiesgo.MEDIO
    nivel_riesgo_zona: NivelRiesgo = NivelRiesgo.MEDIO
    situacion_financiera: SituacionFinanciera = SituacionFinanciera.DESCONOCIDA
    antecedentes_verificados: bool = False
    referencias_comerciales: bool = False


@dataclass
class ScoreRiesgo:
    """Output of the service risk scorer"""

    score: float
    recomendacion: Recomendacion
    contribuciones: Dict[str, float] = field(default_factory=dict)


@dataclass
class AnalisisRiesgo:
    """Risk assessment of a service request as saved by a reviewer"""

    servicio_id: str
    entrada: EntradaRiesgo
    zona_operacion: str
    score: ScoreRiesgo
    recomendacion: Recomendacion  # may differ from score.recomendacion (manual override)
    condiciones_especiales: List[str] = field(default_factory=list)
    evaluado_por: Optional[str] = None

    @property
    def recomendacion_modificada(self) -> bool:
        return self.recomendacion != self.score.recomendacion
