"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from custodia_scoring.infrastructure.clients.facturacion import FacturacionClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_facturacion_client() -> FacturacionClient:
    """Provide billing data store client instance"""
    return FacturacionClient()
