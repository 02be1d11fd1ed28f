# -*- coding: utf-8 -*-
"""
storefront/modules/payments/services/gateway/gateway_client.py

Cliente HTTP saliente hacia el gateway de pagos (API REST de Razorpay).

Operaciones:
- create_remote_order: crea la orden remota (idempotente por receipt)
- fetch_payment: estado autoritativo de un pago
- create_refund: reembolso total o parcial

Política:
- Cada operación tiene un tiempo total máximo (RAZORPAY_TIMEOUT); vencerlo
  es GatewayUnavailable y no deja efectos locales.
- Fallas de red, 429 y 5xx se reintentan con backoff exponencial hasta
  RAZORPAY_MAX_RETRIES intentos en total; luego GatewayUnavailable.
- 4xx de validación son GatewayRejected y nunca se reintentan; 404 es
  GatewayNotFound.
- Las llamadas que crean recursos envían Idempotency-Key para que un
  reintento no duplique órdenes ni reembolsos.

Los montos viajan en unidades menores (paise/centavos).

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Optional

import httpx

from storefront.shared.config.settings_payments import PaymentsSettings
from storefront.shared.core.http_retry_utils import retry_with_backoff
from storefront.modules.payments.errors import GatewayNotFound, GatewayRejected, GatewayUnavailable
from storefront.modules.payments.metrics import payment_metrics

logger = logging.getLogger(__name__)

USER_AGENT = "storefront-payments/1.0"


@dataclass(frozen=True)
class RemoteOrder:
    remote_order_id: str
    amount_minor: int
    currency: str
    status: str
    receipt: Optional[str] = None


@dataclass(frozen=True)
class RemotePayment:
    payment_id: str
    status: str
    amount_minor: int
    currency: str
    remote_order_id: Optional[str] = None
    error_description: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RemoteRefund:
    refund_id: str
    payment_id: str
    amount_minor: int
    currency: str
    status: str


def _notes(entity: dict[str, Any]) -> dict[str, Any]:
    # La API devuelve [] cuando no hay notas
    notes = entity.get("notes")
    return dict(notes) if isinstance(notes, dict) else {}


def parse_remote_payment(entity: dict[str, Any]) -> RemotePayment:
    """Convierte una entidad `payment` (API o payload de webhook) en RemotePayment."""
    return RemotePayment(
        payment_id=str(entity["id"]),
        status=str(entity.get("status") or ""),
        amount_minor=int(entity.get("amount") or 0),
        currency=str(entity.get("currency") or "").upper(),
        remote_order_id=entity.get("order_id"),
        error_description=entity.get("error_description"),
        metadata=_notes(entity),
    )


def parse_remote_refund(entity: dict[str, Any]) -> RemoteRefund:
    return RemoteRefund(
        refund_id=str(entity["id"]),
        payment_id=str(entity.get("payment_id") or ""),
        amount_minor=int(entity.get("amount") or 0),
        currency=str(entity.get("currency") or "").upper(),
        status=str(entity.get("status") or ""),
    )


class GatewayClient:
    """
    Cliente del gateway construido explícitamente con su configuración.

    Se crea una vez en el lifespan y se inyecta en el orquestador y el
    coordinador de reembolsos; en tests se construye con un
    httpx.MockTransport o se reemplaza por un doble.
    """

    def __init__(
        self,
        settings: PaymentsSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._max_retries = max(0, settings.razorpay_max_retries - 1)
        self._client = httpx.AsyncClient(
            base_url=settings.razorpay_api_base_url,
            auth=(settings.razorpay_key_id or "", settings.key_secret() or ""),
            timeout=httpx.Timeout(settings.timeout_seconds),
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Operaciones
    # ------------------------------------------------------------------
    async def create_remote_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> RemoteOrder:
        payload = {
            "amount": int(amount_minor),
            "currency": currency,
            "receipt": receipt,
            "payment_capture": 1,
            "notes": metadata or {},
        }
        data = await self._request(
            "create_order",
            "POST",
            "/orders",
            json=payload,
            idempotency_key=receipt,
        )
        return RemoteOrder(
            remote_order_id=str(data["id"]),
            amount_minor=int(data.get("amount", amount_minor)),
            currency=str(data.get("currency", currency)).upper(),
            status=str(data.get("status", "created")),
            receipt=data.get("receipt", receipt),
        )

    async def fetch_payment(self, payment_id: str) -> RemotePayment:
        data = await self._request("fetch_payment", "GET", f"/payments/{payment_id}")
        return parse_remote_payment(data)

    async def create_refund(
        self,
        payment_id: str,
        amount_minor: Optional[int] = None,
        metadata: Optional[dict[str, Any]] = None,
        *,
        idempotency_key: Optional[str] = None,
    ) -> RemoteRefund:
        """Reembolso parcial si se da amount_minor; total en otro caso."""
        payload: dict[str, Any] = {"notes": metadata or {}}
        if amount_minor is not None:
            payload["amount"] = int(amount_minor)
        data = await self._request(
            "create_refund",
            "POST",
            f"/payments/{payment_id}/refund",
            json=payload,
            idempotency_key=idempotency_key,
        )
        refund = parse_remote_refund(data)
        if not refund.payment_id:
            refund = RemoteRefund(
                refund_id=refund.refund_id,
                payment_id=payment_id,
                amount_minor=refund.amount_minor,
                currency=refund.currency,
                status=refund.status,
            )
        return refund

    # ------------------------------------------------------------------
    # Transporte
    # ------------------------------------------------------------------
    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
    ) -> dict[str, Any]:
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else None
        start = perf_counter()

        def _on_retry(attempt: int, reason: str) -> None:
            payment_metrics.observe_gateway_retry(operation, reason)

        try:
            async with asyncio.timeout(self._settings.timeout_seconds):
                response = await retry_with_backoff(
                    self._client.request,
                    method,
                    path,
                    json=json,
                    headers=headers,
                    max_retries=self._max_retries,
                    base_delay=self._settings.retry_delay_seconds,
                    max_delay=self._settings.retry_max_delay_seconds,
                    on_retry=_on_retry,
                )
        except TimeoutError as e:
            payment_metrics.observe_gateway_call(operation, "timeout", perf_counter() - start)
            logger.error(f"[Gateway] {operation} excedió {self._settings.timeout_seconds:.1f}s")
            raise GatewayUnavailable(f"{operation}: timeout") from e
        except httpx.TransportError as e:
            payment_metrics.observe_gateway_call(operation, "unavailable", perf_counter() - start)
            logger.error(f"[Gateway] {operation} sin conexión: {e!r}")
            raise GatewayUnavailable(f"{operation}: {type(e).__name__}") from e

        elapsed = perf_counter() - start
        status = response.status_code

        if status == 429 or status >= 500:
            payment_metrics.observe_gateway_call(operation, "unavailable", elapsed)
            logger.error(f"[Gateway] {operation} HTTP {status} tras agotar reintentos")
            raise GatewayUnavailable(f"{operation}: HTTP {status}")

        if status == 404:
            payment_metrics.observe_gateway_call(operation, "not_found", elapsed)
            raise GatewayNotFound(f"{operation}: {path}")

        if status >= 400:
            description = self._error_description(response)
            payment_metrics.observe_gateway_call(operation, "rejected", elapsed)
            logger.warning(f"[Gateway] {operation} rechazada HTTP {status}: {description}")
            raise GatewayRejected(description, status_code=status)

        try:
            data = response.json()
        except ValueError as e:
            payment_metrics.observe_gateway_call(operation, "invalid_response", elapsed)
            raise GatewayUnavailable(f"{operation}: respuesta no JSON") from e

        payment_metrics.observe_gateway_call(operation, "success", elapsed)
        logger.debug(f"[Gateway] {operation} OK en {elapsed:.3f}s")
        return data

    @staticmethod
    def _error_description(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return f"HTTP {response.status_code}"
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("description"):
            return str(error["description"])
        return f"HTTP {response.status_code}"


__all__ = [
    "GatewayClient",
    "RemoteOrder",
    "RemotePayment",
    "RemoteRefund",
    "parse_remote_payment",
    "parse_remote_refund",
]

# Fin del archivo storefront/modules/payments/services/gateway/gateway_client.py
