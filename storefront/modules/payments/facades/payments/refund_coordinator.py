# -*- coding: utf-8 -*-
"""
storefront/modules/payments/facades/payments/refund_coordinator.py

Reembolsos: inicio por API y reconciliación del webhook refund.processed.

Reglas:
- Solo un PaymentRecord en captured admite reembolso; cualquier otro estado
  es InvalidTransition sin llamar al gateway.
- El monto debe ser > 0 y no superar lo que queda por reembolsar
  (amount - refund_amount). Sin monto se reembolsa el saldo restante.
- Se permiten varios parciales hasta completar el total; al completarlo el
  registro pasa a refunded y la orden a refunded. Un parcial deja el
  registro en captured con refund_amount acumulado.
- La llamada al gateway ocurre fuera de cualquier transacción; si falla
  no se toca el estado local.
- refund_id es único en payment_refunds: la API y el webhook pueden
  reportar el mismo reembolso y solo el primero lo aplica.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.shared.config.settings_payments import PaymentsSettings
from storefront.modules.payments.enums import PaymentStatus, RefundType, TransitionSource
from storefront.modules.payments.errors import (
    InvalidRefundAmount,
    InvalidTransition,
    PaymentError,
    PaymentNotFound,
    RefundsDisabled,
)
from storefront.modules.payments.metrics import payment_metrics
from storefront.modules.payments.models import PaymentRecord, PaymentRefund
from storefront.modules.payments.services.gateway import GatewayClient, RemoteRefund, parse_remote_refund
from storefront.modules.payments.services.ledger import OrderLedger
from storefront.modules.payments.utils.amounts import TWO_PLACES, from_minor, to_decimal, to_minor

logger = logging.getLogger(__name__)

MAX_CAS_ATTEMPTS = 3


@dataclass(frozen=True)
class RefundResult:
    refund_id: str
    payment_id: str
    order_id: int
    amount: Decimal
    currency: str
    refund_type: RefundType
    gateway_status: Optional[str]
    payment_status: PaymentStatus
    refunded_total: Decimal
    changed: bool


def refund_idempotency_key(payment_id: str, refunded_minor: int, amount_minor: int) -> str:
    """Misma solicitud sobre el mismo saldo produce la misma llave."""
    return f"refund_{payment_id}_{refunded_minor}_{amount_minor}"


class RefundCoordinator:
    def __init__(
        self,
        ledger: OrderLedger,
        gateway: GatewayClient,
        settings: PaymentsSettings,
    ) -> None:
        self._ledger = ledger
        self._gateway = gateway
        self._settings = settings

    @property
    def _provider(self) -> str:
        return self._settings.payments_provider

    # ------------------------------------------------------------------
    # API
    # ------------------------------------------------------------------
    async def refund(
        self,
        payment_id: str,
        amount: Optional[Decimal | int | str] = None,
        reason: Optional[str] = None,
    ) -> RefundResult:
        if not self._settings.refunds_enabled:
            raise RefundsDisabled()

        payment_metrics.observe_refund_requested(self._provider)

        record = await self._ledger.get_payment_record_by_payment_id(payment_id)
        if record is None:
            raise PaymentNotFound(f"payment_id={payment_id}")

        if record.payment_status != PaymentStatus.CAPTURED:
            payment_metrics.observe_invalid_transition(record.payment_status, PaymentStatus.REFUNDED)
            payment_metrics.observe_refund_failed(self._provider, "invalid_state")
            logger.warning(
                f"[Refund] Rechazado payment_id={payment_id}: estado {record.payment_status}, "
                f"se requiere captured"
            )
            raise InvalidTransition(f"{record.payment_status} no admite reembolso")

        remaining = record.refundable_amount
        refund_amount = self._validate_refund_amount(amount, remaining)

        refunded_minor = to_minor(record.refund_amount or 0)
        amount_minor = to_minor(refund_amount)
        # Sin reembolsos previos y sin monto: reembolso total nativo del gateway
        gateway_amount = None if (amount is None and refunded_minor == 0) else amount_minor

        try:
            remote = await self._gateway.create_refund(
                payment_id,
                gateway_amount,
                {"order_id": str(record.order_id), "reason": reason or ""},
                idempotency_key=refund_idempotency_key(payment_id, refunded_minor, amount_minor),
            )
        except PaymentError as e:
            payment_metrics.observe_refund_failed(self._provider, e.error_code)
            logger.error(f"[Refund] Gateway falló payment_id={payment_id}: {e.detail}")
            raise

        if not remote.amount_minor:
            remote = RemoteRefund(
                refund_id=remote.refund_id,
                payment_id=remote.payment_id,
                amount_minor=amount_minor,
                currency=remote.currency or record.currency,
                status=remote.status,
            )

        return await self._apply_refund(
            record.order_id,
            remote,
            reason=reason,
            source=TransitionSource.REFUND_API,
        )

    @staticmethod
    def _validate_refund_amount(amount: Optional[Decimal | int | str], remaining: Decimal) -> Decimal:
        if amount is None:
            if remaining <= 0:
                raise InvalidRefundAmount("No queda saldo por reembolsar")
            return remaining

        try:
            value = to_decimal(amount)
        except PaymentError as e:
            raise InvalidRefundAmount(e.detail) from e

        if not value.is_finite() or value != value.quantize(TWO_PLACES):
            raise InvalidRefundAmount(f"Monto de reembolso inválido: {amount}")
        if value <= 0:
            raise InvalidRefundAmount("El monto de reembolso debe ser mayor a cero")
        if value > remaining:
            raise InvalidRefundAmount(f"El monto {value} excede lo reembolsable ({remaining})")
        return value

    # ------------------------------------------------------------------
    # Webhook refund.processed
    # ------------------------------------------------------------------
    async def reconcile_refund_event(self, entity: dict[str, Any]) -> dict[str, Any]:
        """Aplica un refund.processed; idempotente por refund_id."""
        try:
            refund = parse_remote_refund(entity)
        except (TypeError, ValueError) as e:
            logger.warning(f"[Refund] Entidad refund mal formada: {e}")
            return {"status": "ignored", "reason": "malformed_payload"}

        if refund.amount_minor <= 0 or not refund.payment_id:
            logger.warning(
                f"[Refund] refund_id={refund.refund_id} sin monto positivo o sin payment_id: ignorado"
            )
            return {"status": "ignored", "reason": "malformed_payload", "refund_id": refund.refund_id}

        if await self._ledger.get_refund(refund.refund_id) is not None:
            logger.info(f"[Refund] Webhook duplicado refund_id={refund.refund_id}: no-op")
            return {"status": "noop", "refund_id": refund.refund_id}

        record = await self._ledger.get_payment_record_by_payment_id(refund.payment_id)
        if record is None:
            logger.warning(
                f"[Refund] Webhook sin PaymentRecord para payment_id={refund.payment_id}; "
                f"refund_id={refund.refund_id} ignorado"
            )
            return {"status": "ignored", "reason": "payment_not_found", "refund_id": refund.refund_id}

        notes = entity.get("notes") if isinstance(entity.get("notes"), dict) else {}
        noted_order = notes.get("order_id")
        if noted_order is not None and str(noted_order) != str(record.order_id):
            logger.warning(
                f"[Refund] order_id de notas ({noted_order}) no coincide con el del pago "
                f"({record.order_id}); refund_id={refund.refund_id}"
            )
            return {"status": "rejected", "reason": "order_mismatch", "refund_id": refund.refund_id}

        result = await self._apply_refund(
            record.order_id,
            refund,
            reason=None,
            source=TransitionSource.WEBHOOK,
        )
        return {
            "status": "processed" if result.changed else "noop",
            "order_id": result.order_id,
            "refund_id": result.refund_id,
            "payment_status": result.payment_status.value,
        }

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------
    async def _apply_refund(
        self,
        order_id: int,
        remote: RemoteRefund,
        *,
        reason: Optional[str],
        source: TransitionSource,
    ) -> RefundResult:
        amount = from_minor(remote.amount_minor)

        async def _commit(session: AsyncSession) -> Optional[RefundResult]:
            record = await self._ledger.get_payment_record(order_id, session)
            if record is None:
                raise PaymentNotFound(f"order_id={order_id}")

            existing = await self._ledger.get_refund(remote.refund_id, session)
            if existing is not None:
                return self._result_from_existing(existing, record)

            if record.payment_status != PaymentStatus.CAPTURED:
                raise InvalidTransition(f"{record.payment_status} no admite reembolso")

            previous = Decimal(record.refund_amount or 0)
            new_total = (previous + amount).quantize(TWO_PLACES)
            captured = Decimal(record.amount)
            if new_total > captured:
                logger.error(
                    f"[Refund] refund_id={remote.refund_id} excede lo capturado "
                    f"({new_total} > {captured}) order_id={order_id}"
                )
                raise InvalidRefundAmount(f"Reembolso acumulado {new_total} excede {captured}")

            is_full = new_total >= captured
            fields: dict[str, Any] = {"refund_id": remote.refund_id, "refund_amount": new_total}
            if is_full:
                fields["payment_status"] = PaymentStatus.REFUNDED

            updated = await self._ledger.upsert_payment_record(
                order_id,
                fields,
                session,
                source=source,
                conditions=(PaymentRecord.refund_amount == previous,),
            )
            if updated is None:
                return None

            refund_type = RefundType.FULL if is_full else RefundType.PARTIAL
            await self._ledger.add_refund(
                session,
                refund_id=remote.refund_id,
                payment_id=updated.payment_id or remote.payment_id,
                order_id=order_id,
                amount=amount,
                currency=remote.currency or updated.currency,
                refund_type=refund_type.value,
                gateway_status=remote.status or None,
                reason=reason,
                source=source.value,
            )

            return RefundResult(
                refund_id=remote.refund_id,
                payment_id=updated.payment_id or remote.payment_id,
                order_id=order_id,
                amount=amount,
                currency=updated.currency,
                refund_type=refund_type,
                gateway_status=remote.status or None,
                payment_status=PaymentStatus(updated.payment_status),
                refunded_total=new_total,
                changed=True,
            )

        for attempt in range(1, MAX_CAS_ATTEMPTS + 1):
            try:
                result = await self._ledger.with_transaction(_commit)
            except IntegrityError:
                # Otro camino (API o webhook) insertó el mismo refund_id primero
                existing = await self._ledger.get_refund(remote.refund_id)
                record = await self._ledger.get_payment_record(order_id)
                if existing is None or record is None:
                    raise
                return self._result_from_existing(existing, record)

            if result is not None:
                if result.changed:
                    payment_metrics.observe_refund_succeeded(self._provider, result.refund_type.value)
                    logger.info(
                        f"[Refund] order_id={order_id} refund_id={result.refund_id} "
                        f"{result.refund_type.value} {result.amount} {result.currency} "
                        f"(acumulado {result.refunded_total}, source={source.value})"
                    )
                return result

            logger.info(f"[Refund] Reintento {attempt}/{MAX_CAS_ATTEMPTS} order_id={order_id}: estado cambió")

        raise InvalidTransition(f"order_id={order_id}: el registro cambió concurrentemente durante el reembolso")

    @staticmethod
    def _result_from_existing(existing: PaymentRefund, record: PaymentRecord) -> RefundResult:
        return RefundResult(
            refund_id=existing.refund_id,
            payment_id=existing.payment_id,
            order_id=existing.order_id,
            amount=Decimal(existing.amount),
            currency=existing.currency,
            refund_type=RefundType(existing.refund_type),
            gateway_status=existing.gateway_status,
            payment_status=PaymentStatus(record.payment_status),
            refunded_total=Decimal(record.refund_amount or 0),
            changed=False,
        )


__all__ = ["RefundCoordinator", "RefundResult", "refund_idempotency_key"]

# Fin del archivo storefront/modules/payments/facades/payments/refund_coordinator.py
