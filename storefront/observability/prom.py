# -*- coding: utf-8 -*-
"""
storefront/observability/prom.py

Observabilidad Prometheus para Storefront.

- Middleware HTTP: latencia, conteo y peticiones en curso por ruta
- Endpoint /metrics que concatena el registro global (HTTP) y el de pagos
- Soporte multiproceso si PROMETHEUS_MULTIPROC_DIR está definido

Autor: Storefront Payments
Fecha: 02/10/2026
"""

import os
from time import perf_counter
from typing import Optional

from fastapi import FastAPI
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    multiprocess,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from storefront.modules.payments.metrics import payment_metrics

METRICS_PATH = "/metrics"

# El label `route` es la plantilla (/status/{order_id}), nunca la URL concreta
HTTP_REQUESTS_TOTAL = Counter(
    "storefront_http_requests_total",
    "Peticiones HTTP atendidas",
    ["method", "route", "status"],
)
HTTP_REQUEST_SECONDS = Histogram(
    "storefront_http_request_duration_seconds",
    "Latencia de peticiones HTTP (s)",
    ["method", "route"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)
HTTP_IN_PROGRESS = Gauge(
    "storefront_http_requests_in_progress",
    "Peticiones HTTP en curso",
    ["method"],
    multiprocess_mode="livesum",
)


def _route_template(request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Instrumenta cada petición salvo el propio scrape de /metrics."""

    async def dispatch(self, request, call_next):
        if request.url.path == METRICS_PATH:
            return await call_next(request)

        method = request.method
        status = "500"
        start = perf_counter()
        HTTP_IN_PROGRESS.labels(method).inc()
        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        finally:
            route = _route_template(request)
            HTTP_IN_PROGRESS.labels(method).dec()
            HTTP_REQUEST_SECONDS.labels(method, route).observe(perf_counter() - start)
            HTTP_REQUESTS_TOTAL.labels(method, route, status).inc()


def _build_registry() -> Optional[CollectorRegistry]:
    """Registro multiproceso si PROMETHEUS_MULTIPROC_DIR existe; None usa el global."""
    if not os.environ.get("PROMETHEUS_MULTIPROC_DIR"):
        return None
    registry = CollectorRegistry()
    multiprocess.MultiProcessCollector(registry)
    return registry


def mount_metrics(app: FastAPI, path: str = METRICS_PATH) -> None:
    registry = _build_registry()

    @app.get(path, include_in_schema=False)
    def metrics():
        data = generate_latest(registry) if registry else generate_latest()
        data += payment_metrics.render_prometheus_metrics()
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)


def setup_observability(app: FastAPI, *, http_metrics: bool = True) -> None:
    """Monta /metrics y, si se pide, el middleware HTTP."""
    if http_metrics:
        app.add_middleware(PrometheusMiddleware)
    mount_metrics(app)


__all__ = ["PrometheusMiddleware", "mount_metrics", "setup_observability"]

# Fin del archivo storefront/observability/prom.py
