# -*- coding: utf-8 -*-
"""
storefront/modules/payments/services/ledger/order_ledger.py

Interfaz transaccional sobre orders y payment_records.

Es el único escritor de order_status (por motivos de pago) y de
payment_status. Reglas:
- Toda mutación exige una sesión con transacción abierta (with_transaction).
- Los cambios de estado son compare-and-set: se actualiza solo si el
  estado sigue siendo el leído. Si otra transacción ganó la carrera,
  upsert_payment_record devuelve None y el llamador relee.
- Cada cambio de payment_status deja una fila en payment_transitions
  y mueve order_status según ORDER_STATUS_FOR_PAYMENT, dentro de la
  misma transacción.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Optional, Sequence, TypeVar

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.modules.payments.enums import (
    ORDER_STATUS_FOR_PAYMENT,
    OrderStatus,
    PaymentStatus,
    TransitionSource,
    can_transition,
)
from storefront.modules.payments.errors import InvalidTransition
from storefront.modules.payments.metrics import payment_metrics
from storefront.modules.payments.models import (
    Order,
    PaymentRecord,
    PaymentRefund,
    PaymentTransition,
)
from storefront.modules.payments.repositories import (
    OrderRepository,
    PaymentRecordRepository,
    PaymentRefundRepository,
    PaymentTransitionRepository,
)
from storefront.modules.payments.utils.datetime_helpers import utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _status_value(status: Optional[str]) -> Optional[str]:
    return PaymentStatus(status).value if status is not None else None


class OrderLedger:
    """Lectura/escritura transaccional de Order y PaymentRecord."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self.orders = OrderRepository()
        self.records = PaymentRecordRepository()
        self.refunds = PaymentRefundRepository()
        self.transitions = PaymentTransitionRepository()

    # ------------------------------------------------------------------
    # Transacciones
    # ------------------------------------------------------------------
    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Commit si el bloque termina normal; rollback ante cualquier excepción."""
        async with self._session_factory() as session:
            async with session.begin():
                yield session

    async def with_transaction(self, fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
        async with self.transaction() as session:
            return await fn(session)

    async def _read(
        self,
        fn: Callable[[AsyncSession], Awaitable[T]],
        session: Optional[AsyncSession],
    ) -> T:
        if session is not None:
            return await fn(session)
        async with self._session_factory() as own:
            return await fn(own)

    @staticmethod
    def _require_transaction(session: AsyncSession) -> None:
        if session is None or not session.in_transaction():
            raise RuntimeError("Las escrituras del ledger requieren una transacción abierta (with_transaction)")

    # ------------------------------------------------------------------
    # Lecturas
    # ------------------------------------------------------------------
    async def get_order(self, order_id: int, session: Optional[AsyncSession] = None) -> Optional[Order]:
        return await self._read(lambda s: self.orders.get(s, order_id), session)

    async def get_payment_record(
        self,
        order_id: int,
        session: Optional[AsyncSession] = None,
    ) -> Optional[PaymentRecord]:
        return await self._read(lambda s: self.records.get_by_order_id(s, order_id), session)

    async def get_payment_record_by_payment_id(
        self,
        payment_id: str,
        session: Optional[AsyncSession] = None,
    ) -> Optional[PaymentRecord]:
        return await self._read(lambda s: self.records.get_by_payment_id(s, payment_id), session)

    async def get_payment_record_by_remote_order_id(
        self,
        payment_order_id: str,
        session: Optional[AsyncSession] = None,
    ) -> Optional[PaymentRecord]:
        return await self._read(lambda s: self.records.get_by_payment_order_id(s, payment_order_id), session)

    async def get_refund(self, refund_id: str, session: Optional[AsyncSession] = None) -> Optional[PaymentRefund]:
        return await self._read(lambda s: self.refunds.get_by_refund_id(s, refund_id), session)

    async def list_transitions(
        self,
        order_id: int,
        session: Optional[AsyncSession] = None,
    ) -> Sequence[PaymentTransition]:
        return await self._read(lambda s: self.transitions.list_by_order(s, order_id), session)

    # ------------------------------------------------------------------
    # Escrituras
    # ------------------------------------------------------------------
    async def upsert_payment_record(
        self,
        order_id: int,
        fields: dict[str, Any],
        session: AsyncSession,
        *,
        source: TransitionSource,
        conditions: Sequence[ColumnElement[bool]] = (),
    ) -> Optional[PaymentRecord]:
        """
        Crea o actualiza el PaymentRecord de la orden.

        - Sin registro previo: inserta (fields debe traer payment_status=created).
        - Con registro: valida la transición y hace un update condicionado a
          que payment_status siga en el estado leído y a las `conditions` extra.
        - Si cambia payment_status, la orden pasa al estado emparejado.

        Returns:
            El registro actualizado, o None si otra transacción cambió el
            estado entre la lectura y el update.

        Raises:
            InvalidTransition: si el cambio de estado no está permitido.
        """
        self._require_transaction(session)

        target = fields.get("payment_status")
        current = await self.records.get_by_order_id(session, order_id)
        from_status = _status_value(current.payment_status) if current is not None else None

        if target is not None and not can_transition(from_status, target):
            payment_metrics.observe_invalid_transition(from_status, PaymentStatus(target).value)
            logger.warning(
                f"[Ledger] Transición rechazada order_id={order_id} "
                f"{from_status or 'none'} → {target} (source={source})"
            )
            raise InvalidTransition(f"{from_status or 'none'} → {target}")

        if current is None:
            record = await self.records.create(session, order_id=order_id, **fields)
        else:
            values = {**fields, "date_modified": utcnow()}
            expected = [PaymentStatus(current.payment_status)]
            updated = await self.records.conditional_update(session, order_id, values, expected, *conditions)
            if updated == 0:
                logger.info(
                    f"[Ledger] Update condicional sin efecto order_id={order_id} "
                    f"(esperado {[s.value for s in expected]}); otra transacción ganó"
                )
                return None
            record = await self.records.get_by_order_id(session, order_id)

        if target is not None:
            await self._record_transition(session, record, from_status, source)
            await self.set_order_status(order_id, ORDER_STATUS_FOR_PAYMENT[PaymentStatus(target)], session)

        return record

    async def set_order_status(self, order_id: int, status: OrderStatus, session: AsyncSession) -> None:
        self._require_transaction(session)
        updated = await self.orders.update_status(session, order_id, status)
        if updated == 0:
            raise RuntimeError(f"Orden {order_id} desapareció durante la transacción")

    async def add_refund(self, session: AsyncSession, **fields: Any) -> PaymentRefund:
        """Inserta un reembolso; IntegrityError si refund_id ya existe."""
        self._require_transaction(session)
        return await self.refunds.create(session, **fields)

    async def _record_transition(
        self,
        session: AsyncSession,
        record: PaymentRecord,
        from_status: Optional[str],
        source: TransitionSource,
    ) -> None:
        to_status = PaymentStatus(record.payment_status).value
        await self.transitions.create(
            session,
            order_id=record.order_id,
            from_status=from_status,
            to_status=to_status,
            source=source.value,
            payment_order_id=record.payment_order_id,
            payment_id=record.payment_id,
            refund_id=record.refund_id,
        )
        payment_metrics.observe_transition(from_status, to_status, source.value)
        logger.info(
            f"[Ledger] order_id={record.order_id} {from_status or 'none'} → {to_status} "
            f"(source={source.value}, payment_id={record.payment_id})"
        )


__all__ = ["OrderLedger"]

# Fin del archivo storefront/modules/payments/services/ledger/order_ledger.py
