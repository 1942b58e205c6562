"""Prometheus metrics for credit analyses, risk recommendations and billing store health"""

from prometheus_client import Counter, Histogram

credito_analisis_counter = Counter(
    "custodia_credito_analisis_total",
    "Client credit analyses computed",
    ["comportamiento"],  # excelente | bueno | regular | riesgoso
)

analisis_riesgo_counter = Counter(
    "custodia_analisis_riesgo_total",
    "Service risk analyses saved",
    ["recomendacion", "override"],
)

facturacion_fetch_failures_counter = Counter(
    "facturacion_fetch_failures_total",
    "Failed billing data store reads",
)

request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_credito_analisis(comportamiento: str) -> None:
    credito_analisis_counter.labels(comportamiento=comportamiento).inc()


def record_analisis_riesgo(recomendacion: str, recomendacion_automatica: str) -> None:
    """Count saved analyses, split by whether the reviewer overrode the automatic recommendation"""
    override = "true" if recomendacion != recomendacion_automatica else "false"
    analisis_riesgo_counter.labels(recomendacion=recomendacion, override=override).inc()
