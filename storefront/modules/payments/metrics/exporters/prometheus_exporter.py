# -*- coding: utf-8 -*-
"""
storefront/modules/payments/metrics/exporters/prometheus_exporter.py

Exporter Prometheus para el módulo de pagos.
Registro propio (no el global) para que /metrics lo concatene al de HTTP.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

import logging

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
# Registro de Prometheus del módulo
# --------------------------------------------------------------------------
registry = CollectorRegistry()

# --------------------------------------------------------------------------
# Definición de métricas
# --------------------------------------------------------------------------

CHECKOUT_STARTED_TOTAL = Counter(
    "payments_checkout_started_total",
    "Órdenes remotas creadas en el gateway",
    ["provider", "currency"],
    registry=registry,
)

# Webhooks: verificación y outcome por separado
WEBHOOKS_RECEIVED_TOTAL = Counter(
    "payments_webhook_received_total",
    "Total webhooks recibidos por proveedor",
    ["provider"],
    registry=registry,
)
WEBHOOKS_VERIFIED_TOTAL = Counter(
    "payments_webhook_verified_total",
    "Total webhooks por resultado de verificación (success/failure)",
    ["provider", "result"],
    registry=registry,
)
WEBHOOKS_OUTCOME_TOTAL = Counter(
    "payments_webhook_outcome_total",
    "Total webhooks por outcome (processed/noop/ignored/duplicate/rejected)",
    ["provider", "outcome"],
    registry=registry,
)
WEBHOOKS_REJECTED_TOTAL = Counter(
    "payments_webhook_rejected_total",
    "Total webhooks rechazados por proveedor y razón",
    ["provider", "reason"],
    registry=registry,
)
WEBHOOKS_PROCESSING_SECONDS = Histogram(
    "payments_webhook_processing_seconds",
    "Tiempo de procesamiento de webhooks (segundos)",
    ["provider"],
    registry=registry,
)

# Seguridad
SIGNATURE_FAILURES_TOTAL = Counter(
    "payments_signature_failures_total",
    "Firmas inválidas por tipo (client_confirmation/webhook)",
    ["kind"],
    registry=registry,
)
AMOUNT_MISMATCH_TOTAL = Counter(
    "payments_amount_mismatch_total",
    "Total de mismatches de monto detectados",
    ["provider", "path"],
    registry=registry,
)

# Máquina de estados
TRANSITIONS_TOTAL = Counter(
    "payments_transitions_total",
    "Transiciones aplicadas por estado origen/destino y camino",
    ["from_status", "to_status", "source"],
    registry=registry,
)
INVALID_TRANSITIONS_TOTAL = Counter(
    "payments_invalid_transitions_total",
    "Transiciones rechazadas por estado incompatible",
    ["from_status", "to_status"],
    registry=registry,
)

# Gateway
GATEWAY_CALLS_TOTAL = Counter(
    "payments_gateway_calls_total",
    "Llamadas al gateway por operación y resultado",
    ["operation", "result"],
    registry=registry,
)
GATEWAY_RETRIES_TOTAL = Counter(
    "payments_gateway_retries_total",
    "Reintentos hacia el gateway por operación y motivo",
    ["operation", "reason"],
    registry=registry,
)
GATEWAY_LATENCY_SECONDS = Histogram(
    "payments_gateway_latency_seconds",
    "Latencia total de una operación con el gateway, reintentos incluidos",
    ["operation"],
    registry=registry,
)

# Reembolsos
REFUND_REQUESTS_TOTAL = Counter(
    "payments_refund_requests_total",
    "Número total de solicitudes de reembolso",
    ["provider"],
    registry=registry,
)
REFUND_SUCCEEDED_TOTAL = Counter(
    "payments_refund_succeeded_total",
    "Número total de reembolsos registrados",
    ["provider", "refund_type"],
    registry=registry,
)
REFUND_FAILED_TOTAL = Counter(
    "payments_refund_failed_total",
    "Número total de reembolsos fallidos",
    ["provider", "reason"],
    registry=registry,
)


# --------------------------------------------------------------------------
# Funciones auxiliares
# --------------------------------------------------------------------------
def render_prometheus_metrics() -> bytes:
    """Genera la salida actual de las métricas de pagos en formato Prometheus."""
    return generate_latest(registry)


def observe_checkout_started(provider: str, currency: str) -> None:
    CHECKOUT_STARTED_TOTAL.labels(provider=provider, currency=currency).inc()


def observe_webhook_received(provider: str) -> None:
    WEBHOOKS_RECEIVED_TOTAL.labels(provider=provider).inc()


def observe_webhook_verified(provider: str, verification_result: str) -> None:
    """
    Registra el resultado de verificación de firma del webhook.

    Args:
        verification_result: success/failure
    """
    WEBHOOKS_VERIFIED_TOTAL.labels(provider=provider, result=verification_result).inc()


def observe_webhook_outcome(provider: str, outcome: str, duration: float) -> None:
    WEBHOOKS_OUTCOME_TOTAL.labels(provider=provider, outcome=outcome).inc()
    WEBHOOKS_PROCESSING_SECONDS.labels(provider=provider).observe(duration)
    logger.debug(f"[Prometheus] Webhook {provider} outcome={outcome} duration={duration:.4f}s")


def observe_webhook_rejected(provider: str, reason: str) -> None:
    """
    Args:
        reason: invalid_signature/rate_limited/invalid_payload
    """
    WEBHOOKS_REJECTED_TOTAL.labels(provider=provider, reason=reason).inc()


def observe_signature_failure(kind: str) -> None:
    SIGNATURE_FAILURES_TOTAL.labels(kind=kind).inc()


def observe_amount_mismatch(provider: str, path: str) -> None:
    AMOUNT_MISMATCH_TOTAL.labels(provider=provider, path=path).inc()


def observe_transition(from_status: str | None, to_status: str, source: str) -> None:
    TRANSITIONS_TOTAL.labels(
        from_status=from_status or "none",
        to_status=to_status,
        source=source,
    ).inc()


def observe_invalid_transition(from_status: str | None, to_status: str) -> None:
    INVALID_TRANSITIONS_TOTAL.labels(from_status=from_status or "none", to_status=to_status).inc()


def observe_gateway_call(operation: str, result: str, duration: float) -> None:
    GATEWAY_CALLS_TOTAL.labels(operation=operation, result=result).inc()
    GATEWAY_LATENCY_SECONDS.labels(operation=operation).observe(duration)


def observe_gateway_retry(operation: str, reason: str) -> None:
    GATEWAY_RETRIES_TOTAL.labels(operation=operation, reason=reason).inc()


def observe_refund_requested(provider: str) -> None:
    REFUND_REQUESTS_TOTAL.labels(provider=provider).inc()


def observe_refund_succeeded(provider: str, refund_type: str) -> None:
    REFUND_SUCCEEDED_TOTAL.labels(provider=provider, refund_type=refund_type).inc()


def observe_refund_failed(provider: str, reason: str) -> None:
    REFUND_FAILED_TOTAL.labels(provider=provider, reason=reason).inc()


__all__ = [
    "registry",
    "render_prometheus_metrics",
    "observe_checkout_started",
    "observe_webhook_received",
    "observe_webhook_verified",
    "observe_webhook_outcome",
    "observe_webhook_rejected",
    "observe_signature_failure",
    "observe_amount_mismatch",
    "observe_transition",
    "observe_invalid_transition",
    "observe_gateway_call",
    "observe_gateway_retry",
    "observe_refund_requested",
    "observe_refund_succeeded",
    "observe_refund_failed",
]

# Fin del archivo storefront/modules/payments/metrics/exporters/prometheus_exporter.py
