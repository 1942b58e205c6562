"""Pytest fixtures for testing"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import date, timedelta
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from custodia_scoring.api.main import create_app
from custodia_scoring.infrastructure.database.models import Base
from custodia_scoring.infrastructure.database.session import get_db
from custodia_scoring.domain.models import AgingCliente, Cliente, EstadoFactura, Factura, Pago


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def hoy() -> date:
    return date(2025, 6, 30)


@pytest.fixture
def cliente() -> Cliente:
    return Cliente(id="cli_1", nombre="Transportes del Norte", limite_credito=10000.0, dias_credito=30)


@pytest.fixture
def facturas_historial(hoy: date) -> list[Factura]:
    """Two invoices paid 50 days after issue, one overdue, one open and one cancelled"""
    return [
        Factura(
            id="F-1",
            total=3000.0,
            fecha_emision=hoy - timedelta(days=150),
            fecha_vencimiento=hoy - timedelta(days=120),
            estado=EstadoFactura.PAGADA,
            fecha_pago=hoy - timedelta(days=100),
        ),
        Factura(
            id="F-2",
            total=3000.0,
            fecha_emision=hoy - timedelta(days=140),
            fecha_vencimiento=hoy - timedelta(days=110),
            estado=EstadoFactura.PAGADA,
            fecha_pago=hoy - timedelta(days=90),
        ),
        Factura(
            id="F-3",
            total=4000.0,
            fecha_emision=hoy - timedelta(days=60),
            fecha_vencimiento=hoy - timedelta(days=30),
            estado=EstadoFactura.VENCIDA,
        ),
        Factura(
            id="F-4",
            total=5500.0,
            fecha_emision=hoy - timedelta(days=10),
            fecha_vencimiento=hoy + timedelta(days=20),
            estado=EstadoFactura.EMITIDA,
        ),
        Factura(
            id="F-5",
            total=50000.0,
            fecha_emision=hoy - timedelta(days=5),
            fecha_vencimiento=hoy + timedelta(days=25),
            estado=EstadoFactura.CANCELADA,
        ),
    ]


@pytest.fixture
def pagos_antiguos(hoy: date) -> list[Pago]:
    """Applied payments, none in the trailing 60 days"""
    return [
        Pago(id="P-1", monto=3000.0, fecha_pago=hoy - timedelta(days=100)),
        Pago(id="P-2", monto=3000.0, fecha_pago=hoy - timedelta(days=90)),
    ]


@pytest.fixture
def aging() -> AgingCliente:
    return AgingCliente(saldo_pendiente=9500.0, total_vencido=4000.0)
