"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from custodia_scoring.api.middleware import RequestIDMiddleware, MetricsMiddleware
from custodia_scoring.api.v1 import credito, riesgo
from custodia_scoring.infrastructure.database.session import init_db
from custodia_scoring.infrastructure.observability.logging import setup_logging
from custodia_scoring.config import settings

setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Custodia Scoring",
        description="Client credit scoring and service risk analysis",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Last added = first executed, so request IDs exist before metrics run
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(credito.router, prefix="/v1", tags=["credito"])
    app.include_router(riesgo.router, prefix="/v1", tags=["analisis-riesgo"])

    return app


app = create_app()
