# -*- coding: utf-8 -*-
"""
storefront/modules/payments/facades/payments/payment_orchestrator.py

Máquina de estados del pago de una orden.

Estados: NONE → CREATED → AWAITING_CONFIRMATION → CAPTURED, con ramas
→ FAILED (desde CREATED/AWAITING_CONFIRMATION) y → REFUNDED (desde
CAPTURED, vía RefundCoordinator).

Dos caminos compiten por capturar la misma orden: la confirmación del
cliente (confirm_payment) y el webhook payment.captured. Ambos:
1. validan fuera de transacción (firma, gateway, montos),
2. confirman en una transacción corta que relee el registro; si el
   estado destino ya está aplicado con los mismos IDs remotos es no-op,
   si no, update condicional (compare-and-set) sobre el estado leído.
Quien pierde la carrera relee y termina en no-op, nunca duplica efectos.

Ninguna transacción del ledger queda abierta durante una llamada al
gateway.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Awaitable, Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.shared.config.settings_payments import PaymentsSettings
from storefront.modules.payments.enums import (
    OrderStatus,
    PaymentStatus,
    TransitionSource,
    WebhookEventType,
    can_transition,
)
from storefront.modules.payments.errors import (
    AmountMismatch,
    InvalidTransition,
    OrderNotFound,
    PaymentError,
    PaymentNotCaptured,
    SignatureInvalid,
)
from storefront.modules.payments.metrics import payment_metrics
from storefront.modules.payments.models import Order, PaymentRecord
from storefront.modules.payments.services.gateway import GatewayClient, RemotePayment, parse_remote_payment
from storefront.modules.payments.services.ledger import OrderLedger
from storefront.modules.payments.services.webhooks import SignatureVerifier
from storefront.modules.payments.utils.amounts import (
    amounts_match,
    from_minor,
    normalize_currency,
    to_minor,
    validate_amount,
)
from storefront.modules.payments.utils.datetime_helpers import utcnow

from .refund_coordinator import RefundCoordinator

logger = logging.getLogger(__name__)

MAX_CAS_ATTEMPTS = 3
RECEIPT_MAX_LENGTH = 40
REMOTE_CAPTURED = "captured"


@dataclass(frozen=True)
class TransitionOutcome:
    """Registro resultante y si esta llamada aplicó la transición (False = no-op)."""

    record: PaymentRecord
    changed: bool


WebhookHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


class PaymentOrchestrator:
    def __init__(
        self,
        ledger: OrderLedger,
        gateway: GatewayClient,
        verifier: SignatureVerifier,
        refunds: RefundCoordinator,
        settings: PaymentsSettings,
    ) -> None:
        self._ledger = ledger
        self._gateway = gateway
        self._verifier = verifier
        self._refunds = refunds
        self._settings = settings
        self._webhook_handlers: dict[WebhookEventType, WebhookHandler] = {
            WebhookEventType.PAYMENT_AUTHORIZED: self._on_payment_authorized,
            WebhookEventType.PAYMENT_CAPTURED: self._on_payment_captured,
            WebhookEventType.PAYMENT_FAILED: self._on_payment_failed,
            WebhookEventType.REFUND_PROCESSED: self._on_refund_processed,
        }

    @property
    def _provider(self) -> str:
        return self._settings.payments_provider

    def receipt_for(self, order_id: int) -> str:
        """Receipt idempotente derivado del order_id local (máx. 40 caracteres)."""
        return f"{self._settings.razorpay_receipt_prefix}{order_id}"[:RECEIPT_MAX_LENGTH]

    # ==================================================================
    # 1. create_order
    # ==================================================================
    async def create_order(
        self,
        order_id: int,
        amount: Decimal | int | str,
        currency: Optional[str] = None,
        notes: Optional[dict[str, Any]] = None,
    ) -> TransitionOutcome:
        currency = normalize_currency(currency, self._settings.razorpay_currency)
        requested = validate_amount(amount, currency)

        order = await self._ledger.get_order(order_id)
        if order is None:
            raise OrderNotFound(f"order_id={order_id}")

        self._check_amount(
            order,
            to_minor(requested),
            currency,
            path="checkout",
            reference=f"order_id={order_id}",
        )

        existing = await self._ledger.get_payment_record(order_id)
        if existing is not None:
            return self._reuse_existing(existing)

        if order.order_status != OrderStatus.PENDING:
            logger.warning(f"[Checkout] order_id={order_id} en estado {order.order_status}, se requiere pending")
            raise InvalidTransition(f"Orden en estado {order.order_status}")

        receipt = self.receipt_for(order_id)
        metadata = {
            **{str(k): v for k, v in (notes or {}).items()},
            "order_id": str(order_id),
            "customer_id": str(order.customer_id),
        }
        remote = await self._gateway.create_remote_order(to_minor(requested), currency, receipt, metadata)
        payment_metrics.observe_checkout_started(self._provider, currency)

        async def _commit(session: AsyncSession) -> TransitionOutcome:
            current = await self._ledger.get_payment_record(order_id, session)
            if current is not None:
                # Checkout concurrente ganó; el receipt idempotente apunta a la misma orden remota
                return self._reuse_existing(current)

            fresh = await self._ledger.get_order(order_id, session)
            if fresh is None or fresh.order_status != OrderStatus.PENDING:
                raise InvalidTransition(f"order_id={order_id} dejó de estar pending")

            record = await self._ledger.upsert_payment_record(
                order_id,
                {
                    "payment_provider": self._provider,
                    "payment_order_id": remote.remote_order_id,
                    "payment_status": PaymentStatus.CREATED,
                    "amount": requested,
                    "currency": currency,
                },
                session,
                source=TransitionSource.CHECKOUT,
            )
            return TransitionOutcome(record, True)

        try:
            outcome = await self._ledger.with_transaction(_commit)
        except IntegrityError:
            current = await self._ledger.get_payment_record(order_id)
            if current is None:
                raise
            return self._reuse_existing(current)

        logger.info(
            f"[Checkout] order_id={order_id} → {remote.remote_order_id} "
            f"({requested} {currency}, receipt={receipt})"
        )
        return outcome

    @staticmethod
    def _reuse_existing(record: PaymentRecord) -> TransitionOutcome:
        if record.payment_status in (PaymentStatus.CREATED, PaymentStatus.AWAITING_CONFIRMATION):
            return TransitionOutcome(record, False)
        payment_metrics.observe_invalid_transition(record.payment_status, PaymentStatus.CREATED)
        logger.warning(
            f"[Checkout] order_id={record.order_id} ya tiene pago en {record.payment_status}; "
            f"no se crea otra orden remota"
        )
        raise InvalidTransition(f"Pago existente en estado {record.payment_status}")

    # ==================================================================
    # 2. confirm_payment (camino del cliente)
    # ==================================================================
    async def confirm_payment(
        self,
        order_id: int,
        remote_order_id: str,
        remote_payment_id: str,
        signature: str,
        *,
        client_ip: Optional[str] = None,
    ) -> TransitionOutcome:
        if not self._verifier.verify_client_confirmation(remote_order_id, remote_payment_id, signature):
            payment_metrics.observe_signature_failure("client_confirmation")
            logger.warning(
                f"[SECURITY] Firma de confirmación inválida order_id={order_id} "
                f"remote_order_id={remote_order_id} payment_id={remote_payment_id} ip={client_ip}"
            )
            raise SignatureInvalid("client confirmation signature mismatch")

        order = await self._ledger.get_order(order_id)
        if order is None:
            raise OrderNotFound(f"order_id={order_id}")

        record = await self._ledger.get_payment_record(order_id)
        if record is None:
            raise InvalidTransition(f"order_id={order_id} sin PaymentRecord")

        if record.payment_order_id != remote_order_id:
            payment_metrics.observe_signature_failure("client_confirmation")
            logger.warning(
                f"[SECURITY] remote_order_id {remote_order_id} no pertenece a order_id={order_id} "
                f"(esperado {record.payment_order_id}) ip={client_ip}"
            )
            raise SignatureInvalid("remote order does not belong to order")

        if self._capture_applied(record, remote_payment_id):
            logger.info(f"[Confirm] order_id={order_id} payment_id={remote_payment_id} ya capturado: no-op")
            return TransitionOutcome(record, False)

        self._ensure_can_capture(record)

        payment = await self._gateway.fetch_payment(remote_payment_id)
        if payment.remote_order_id and payment.remote_order_id != remote_order_id:
            payment_metrics.observe_signature_failure("client_confirmation")
            logger.warning(
                f"[SECURITY] Pago {remote_payment_id} pertenece a {payment.remote_order_id}, "
                f"no a {remote_order_id} ip={client_ip}"
            )
            raise SignatureInvalid("payment does not belong to remote order")

        if payment.status != REMOTE_CAPTURED:
            logger.info(f"[Confirm] payment_id={remote_payment_id} en estado remoto {payment.status}")
            raise PaymentNotCaptured(f"status={payment.status}")

        self._check_amount(
            order,
            payment.amount_minor,
            payment.currency,
            path="client_confirmation",
            reference=f"payment_id={remote_payment_id}",
            client_ip=client_ip,
        )

        return await self._commit_capture(order_id, payment, TransitionSource.CLIENT_CONFIRMATION)

    # ==================================================================
    # 3. apply_webhook_event
    # ==================================================================
    async def apply_webhook_event(self, event_type: str, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Aplica un evento ya autenticado.

        Returns:
            dict con `status`: processed | noop | ignored | rejected.
            Los errores de dominio no se propagan (el webhook se confirma
            con 200); los de infraestructura sí, para que el gateway reintente.
        """
        kind = WebhookEventType.parse(event_type)
        if kind is None:
            logger.info(f"[Webhook] Evento no soportado '{event_type}': ignorado")
            return {"status": "ignored", "reason": "unsupported_event", "event": str(event_type)}

        try:
            return await self._webhook_handlers[kind](payload)
        except PaymentError as e:
            logger.warning(f"[Webhook] {kind.value} rechazado ({e.error_code}): {e.detail}")
            return {"status": "rejected", "reason": e.error_code, "event": kind.value}

    async def _on_payment_captured(self, payload: dict[str, Any]) -> dict[str, Any]:
        resolved = await self._resolve_payment_event(payload)
        if isinstance(resolved, dict):
            return resolved
        order, record, payment = resolved

        if self._capture_applied(record, payment.payment_id):
            return self._webhook_result(TransitionOutcome(record, False))

        self._ensure_can_capture(record)

        if payment.status and payment.status != REMOTE_CAPTURED:
            raise PaymentNotCaptured(f"status={payment.status}")

        self._check_amount(
            order,
            payment.amount_minor,
            payment.currency,
            path="webhook",
            reference=f"payment_id={payment.payment_id}",
        )

        outcome = await self._commit_capture(order.order_id, payment, TransitionSource.WEBHOOK)
        return self._webhook_result(outcome)

    async def _on_payment_authorized(self, payload: dict[str, Any]) -> dict[str, Any]:
        resolved = await self._resolve_payment_event(payload)
        if isinstance(resolved, dict):
            return resolved
        order, record, payment = resolved

        outcome = await self._transition(
            order.order_id,
            {
                "payment_status": PaymentStatus.AWAITING_CONFIRMATION,
                "payment_id": payment.payment_id,
            },
            source=TransitionSource.WEBHOOK,
            already_applied=lambda r: (
                r.payment_status == PaymentStatus.AWAITING_CONFIRMATION and r.payment_id == payment.payment_id
            ),
        )
        return self._webhook_result(outcome)

    async def _on_payment_failed(self, payload: dict[str, Any]) -> dict[str, Any]:
        resolved = await self._resolve_payment_event(payload)
        if isinstance(resolved, dict):
            return resolved
        order, record, payment = resolved

        outcome = await self._transition(
            order.order_id,
            {
                "payment_status": PaymentStatus.FAILED,
                "payment_id": payment.payment_id,
                "failure_reason": payment.error_description,
            },
            source=TransitionSource.WEBHOOK,
            already_applied=lambda r: (
                r.payment_status == PaymentStatus.FAILED and r.payment_id == payment.payment_id
            ),
        )
        if outcome.changed:
            logger.info(
                f"[Webhook] order_id={order.order_id} pago fallido payment_id={payment.payment_id}: "
                f"{payment.error_description}"
            )
        return self._webhook_result(outcome)

    async def _on_refund_processed(self, payload: dict[str, Any]) -> dict[str, Any]:
        entity = self._entity(payload, "refund")
        if entity is None:
            logger.warning("[Webhook] refund.processed sin entidad refund: ignorado")
            return {"status": "ignored", "reason": "malformed_payload"}
        return await self._refunds.reconcile_refund_event(entity)

    # ------------------------------------------------------------------
    # Resolución de la orden desde el payload
    # ------------------------------------------------------------------
    @staticmethod
    def _entity(payload: dict[str, Any], name: str) -> Optional[dict[str, Any]]:
        container = payload.get("payload") if isinstance(payload, dict) else None
        wrapper = container.get(name) if isinstance(container, dict) else None
        entity = wrapper.get("entity") if isinstance(wrapper, dict) else None
        if not isinstance(entity, dict) or not entity.get("id"):
            return None
        return entity

    async def _resolve_order_id(self, payment: RemotePayment) -> Optional[int]:
        raw = payment.metadata.get("order_id")
        if raw is not None:
            try:
                return int(str(raw).strip())
            except ValueError:
                logger.warning(f"[Webhook] notes.order_id no numérico: {raw!r}")
        if payment.remote_order_id:
            record = await self._ledger.get_payment_record_by_remote_order_id(payment.remote_order_id)
            if record is not None:
                return record.order_id
        return None

    async def _resolve_payment_event(
        self,
        payload: dict[str, Any],
    ) -> tuple[Order, PaymentRecord, RemotePayment] | dict[str, Any]:
        """
        Deriva (orden, registro, pago) del payload; nunca de un order_id externo.
        Devuelve un dict de resultado cuando el evento debe confirmarse sin aplicar.
        """
        entity = self._entity(payload, "payment")
        if entity is None:
            logger.warning("[Webhook] Payload sin entidad payment: ignorado")
            return {"status": "ignored", "reason": "malformed_payload"}

        try:
            payment = parse_remote_payment(entity)
        except (TypeError, ValueError) as e:
            logger.warning(f"[Webhook] Entidad payment mal formada: {e}")
            return {"status": "ignored", "reason": "malformed_payload"}

        order_id = await self._resolve_order_id(payment)
        if order_id is None:
            logger.warning(
                f"[Webhook] No se pudo resolver order_id para payment_id={payment.payment_id} "
                f"remote_order_id={payment.remote_order_id}"
            )
            return {"status": "ignored", "reason": "order_not_resolved"}

        order = await self._ledger.get_order(order_id)
        record = await self._ledger.get_payment_record(order_id)
        if order is None or record is None:
            logger.warning(f"[Webhook] order_id={order_id} sin orden o sin PaymentRecord: ignorado")
            return {"status": "ignored", "reason": "order_not_found", "order_id": order_id}

        if payment.remote_order_id and record.payment_order_id != payment.remote_order_id:
            logger.warning(
                f"[SECURITY] Webhook para {payment.remote_order_id} no coincide con "
                f"order_id={order_id} ({record.payment_order_id})"
            )
            return {"status": "rejected", "reason": "order_mismatch", "order_id": order_id}

        return order, record, payment

    @staticmethod
    def _webhook_result(outcome: TransitionOutcome) -> dict[str, Any]:
        return {
            "status": "processed" if outcome.changed else "noop",
            "order_id": outcome.record.order_id,
            "payment_status": PaymentStatus(outcome.record.payment_status).value,
        }

    # ------------------------------------------------------------------
    # Reglas compartidas
    # ------------------------------------------------------------------
    @staticmethod
    def _capture_applied(record: PaymentRecord, payment_id: str) -> bool:
        return record.payment_status == PaymentStatus.CAPTURED and record.payment_id == payment_id

    @staticmethod
    def _ensure_can_capture(record: PaymentRecord) -> None:
        if not can_transition(record.payment_status, PaymentStatus.CAPTURED):
            payment_metrics.observe_invalid_transition(record.payment_status, PaymentStatus.CAPTURED)
            logger.warning(
                f"[SECURITY] Captura rechazada order_id={record.order_id}: estado {record.payment_status} "
                f"payment_id actual={record.payment_id}"
            )
            raise InvalidTransition(f"{record.payment_status} → captured")

    def _check_amount(
        self,
        order: Order,
        amount_minor: int,
        currency: str,
        *,
        path: str,
        reference: str,
        client_ip: Optional[str] = None,
    ) -> None:
        expected_minor = to_minor(order.total)
        same_currency = (currency or "").upper() == (order.currency or "").upper()
        if same_currency and amounts_match(expected_minor, amount_minor, self._settings.amount_tolerance_minor):
            return

        payment_metrics.observe_amount_mismatch(self._provider, path)
        logger.warning(
            f"[SECURITY] Amount mismatch ({path}) order_id={order.order_id} {reference}: "
            f"esperado {from_minor(expected_minor)} {order.currency}, "
            f"recibido {from_minor(amount_minor)} {currency} ip={client_ip}"
        )
        raise AmountMismatch(f"expected={expected_minor} got={amount_minor}")

    async def _commit_capture(
        self,
        order_id: int,
        payment: RemotePayment,
        source: TransitionSource,
    ) -> TransitionOutcome:
        return await self._transition(
            order_id,
            {
                "payment_status": PaymentStatus.CAPTURED,
                "payment_id": payment.payment_id,
                # Monto autoritativo del gateway, no el solicitado por el cliente
                "amount": from_minor(payment.amount_minor),
                "currency": payment.currency,
                "captured_at": utcnow(),
                "failure_reason": None,
            },
            source=source,
            already_applied=lambda r: self._capture_applied(r, payment.payment_id),
        )

    async def _transition(
        self,
        order_id: int,
        fields: dict[str, Any],
        *,
        source: TransitionSource,
        already_applied: Callable[[PaymentRecord], bool],
    ) -> TransitionOutcome:
        """
        Confirma una transición en una transacción corta.
        Si el update condicional pierde la carrera, relee y reintenta;
        el reintento termina en no-op si el otro camino ya aplicó lo mismo.
        """

        async def _commit(session: AsyncSession) -> Optional[TransitionOutcome]:
            current = await self._ledger.get_payment_record(order_id, session)
            if current is None:
                raise InvalidTransition(f"order_id={order_id} sin PaymentRecord")
            if already_applied(current):
                return TransitionOutcome(current, False)

            record = await self._ledger.upsert_payment_record(order_id, fields, session, source=source)
            if record is None:
                return None
            return TransitionOutcome(record, True)

        for attempt in range(1, MAX_CAS_ATTEMPTS + 1):
            outcome = await self._ledger.with_transaction(_commit)
            if outcome is not None:
                if not outcome.changed:
                    logger.info(
                        f"[Transition] order_id={order_id} ya en {outcome.record.payment_status} "
                        f"(source={source.value}): no-op"
                    )
                return outcome
            logger.info(f"[Transition] Reintento {attempt}/{MAX_CAS_ATTEMPTS} order_id={order_id}: estado cambió")

        raise InvalidTransition(f"order_id={order_id}: el estado cambió concurrentemente")


__all__ = ["PaymentOrchestrator", "TransitionOutcome"]

# Fin del archivo storefront/modules/payments/facades/payments/payment_orchestrator.py
