# -*- coding: utf-8 -*-
"""
storefront/modules/payments/facades/webhooks/webhook_handler.py

Entrada única para webhooks del gateway.

Pasos:
1. Verificar firma sobre el body crudo (X-Razorpay-Signature o X-Signature)
2. Parsear JSON
3. Registrar WebhookEvent (idempotente por event id)
4. Despachar al orquestador (máquina de estados)
5. Marcar el evento como procesado con su outcome

IMPORTANTE:
- Solo la firma inválida se rechaza (WebhookSignatureError → 401).
- Payload ilegible, evento no soportado u orden irresoluble se confirman
  con 200: reintentar no los arregla.
- Errores de infraestructura (BD caída) se propagan como 500 y el evento
  queda sin marcar, así el reintento del gateway lo vuelve a procesar.

Autor: Storefront Payments
Fecha: 02/10/2026
"""
from __future__ import annotations

import hashlib
import json
import logging
from time import perf_counter
from typing import Any, Mapping, Optional

from sqlalchemy.exc import IntegrityError

from storefront.modules.payments.facades.payments import PaymentOrchestrator
from storefront.modules.payments.metrics import payment_metrics
from storefront.modules.payments.repositories import WebhookEventRepository
from storefront.modules.payments.services.ledger import OrderLedger
from storefront.modules.payments.services.webhooks import SignatureVerifier

logger = logging.getLogger(__name__)

SIGNATURE_HEADERS = ("x-razorpay-signature", "x-signature")
EVENT_ID_HEADER = "x-razorpay-event-id"

# Outcomes que cuentan como éxito para el campo `success` de la respuesta
SUCCESS_OUTCOMES = frozenset({"processed", "noop", "duplicate"})


class WebhookSignatureError(Exception):
    """Error de verificación de firma de webhook."""
    pass


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is None:
        # dict plano con claves en otra capitalización
        for key, candidate in headers.items():
            if key.lower() == name:
                return candidate
    return value


def extract_signature(headers: Mapping[str, str]) -> Optional[str]:
    for name in SIGNATURE_HEADERS:
        value = _header(headers, name)
        if value:
            return value
    return None


def compute_event_id(raw_body: bytes, headers: Mapping[str, str]) -> str:
    """Event id del gateway, o sha256 del body crudo si el header no viene."""
    event_id = _header(headers, EVENT_ID_HEADER)
    if event_id and event_id.strip():
        return event_id.strip()
    return f"sha256:{hashlib.sha256(raw_body).hexdigest()}"


def _entity_id(payload: dict[str, Any]) -> Optional[str]:
    container = payload.get("payload")
    if not isinstance(container, dict):
        return None
    for name in ("refund", "payment"):
        wrapper = container.get(name)
        entity = wrapper.get("entity") if isinstance(wrapper, dict) else None
        if isinstance(entity, dict) and entity.get("id"):
            return str(entity["id"])
    return None


def _response(status: str, **extra: Any) -> dict[str, Any]:
    return {"success": status in SUCCESS_OUTCOMES, "status": status, **extra}


async def handle_webhook(
    *,
    raw_body: bytes,
    headers: Mapping[str, str],
    verifier: SignatureVerifier,
    orchestrator: PaymentOrchestrator,
    ledger: OrderLedger,
    provider: str = "razorpay",
    client_ip: Optional[str] = None,
) -> dict[str, Any]:
    """
    Procesa un webhook del gateway.

    Returns:
        Dict con `success` y `status` (processed/noop/duplicate/ignored/rejected)

    Raises:
        WebhookSignatureError: Si la firma es inválida
    """
    start = perf_counter()
    payment_metrics.observe_webhook_received(provider)

    # 1) FIRMA
    if not verifier.verify_webhook(raw_body, extract_signature(headers)):
        payment_metrics.observe_webhook_verified(provider, "failure")
        payment_metrics.observe_webhook_rejected(provider, "invalid_signature")
        payment_metrics.observe_signature_failure("webhook")
        logger.warning(f"[SECURITY] Webhook {provider} rechazado: firma inválida ip={client_ip}")
        raise WebhookSignatureError(f"Invalid {provider} webhook signature")

    payment_metrics.observe_webhook_verified(provider, "success")

    # 2) PAYLOAD
    try:
        payload = json.loads(raw_body)
    except ValueError as e:
        logger.warning(f"[Webhook] Body no es JSON válido: {e}")
        payment_metrics.observe_webhook_rejected(provider, "invalid_payload")
        payment_metrics.observe_webhook_outcome(provider, "ignored", perf_counter() - start)
        return _response("ignored", reason="invalid_payload")

    if not isinstance(payload, dict):
        payment_metrics.observe_webhook_rejected(provider, "invalid_payload")
        payment_metrics.observe_webhook_outcome(provider, "ignored", perf_counter() - start)
        return _response("ignored", reason="invalid_payload")

    event_type = str(payload.get("event") or "")
    event_id = compute_event_id(raw_body, headers)
    events = WebhookEventRepository()

    # 3) REGISTRO IDEMPOTENTE
    try:
        async with ledger.transaction() as session:
            existing = await events.get_by_event_id(session, event_id)
            if existing is not None and existing.processed:
                already_processed = True
            else:
                already_processed = False
                if existing is None:
                    await events.create(
                        session,
                        event_id=event_id,
                        event_type=event_type or "unknown",
                        entity_id=_entity_id(payload),
                        payload=payload,
                        signature_verified=True,
                    )
    except IntegrityError:
        # Entrega concurrente del mismo evento; la otra la está procesando
        already_processed = True

    if already_processed:
        logger.info(f"[Webhook] Evento duplicado {event_id} ({event_type}): ignorado")
        payment_metrics.observe_webhook_outcome(provider, "duplicate", perf_counter() - start)
        return _response("duplicate", event_id=event_id)

    # 4) DESPACHO
    result = await orchestrator.apply_webhook_event(event_type, payload)
    status = str(result.get("status", "processed"))

    # 5) MARCADO
    outcome = status if "reason" not in result else f"{status}:{result['reason']}"
    async with ledger.transaction() as session:
        await events.mark_processed(session, event_id, outcome)

    payment_metrics.observe_webhook_outcome(provider, status, perf_counter() - start)
    logger.info(f"[Webhook] {event_type} {event_id} → {outcome}")

    extra = {k: v for k, v in result.items() if k != "status"}
    return _response(status, event_id=event_id, **extra)


__all__ = [
    "WebhookSignatureError",
    "compute_event_id",
    "extract_signature",
    "handle_webhook",
]

# Fin del archivo storefront/modules/payments/facades/webhooks/webhook_handler.py
