# -*- coding: utf-8 -*-
"""
storefront/modules/payments/repositories/payment_record_repository.py

Repositorio para la tabla payment_records.

Responsabilidades:
- Búsquedas por order_id, payment_id y payment_order_id
- Update condicional (compare-and-set sobre payment_status)

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from typing import Any, Iterable, Optional

from sqlalchemy import ColumnElement, update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.shared.database.repository import BaseRepository
from storefront.modules.payments.enums import PaymentStatus
from storefront.modules.payments.models import PaymentRecord


class PaymentRecordRepository(BaseRepository[PaymentRecord]):
    def __init__(self) -> None:
        super().__init__(PaymentRecord)

    async def get_by_order_id(self, session: AsyncSession, order_id: int) -> Optional[PaymentRecord]:
        return await self.first_by(session, PaymentRecord.order_id == order_id)

    async def get_by_payment_id(self, session: AsyncSession, payment_id: str) -> Optional[PaymentRecord]:
        return await self.first_by(session, PaymentRecord.payment_id == payment_id)

    async def get_by_payment_order_id(
        self,
        session: AsyncSession,
        payment_order_id: str,
    ) -> Optional[PaymentRecord]:
        return await self.first_by(session, PaymentRecord.payment_order_id == payment_order_id)

    # -----------------------------------------------------------
    # Compare-and-set: solo actualiza si el estado sigue siendo el leído
    # -----------------------------------------------------------
    async def conditional_update(
        self,
        session: AsyncSession,
        order_id: int,
        values: dict[str, Any],
        expected_statuses: Iterable[PaymentStatus],
        *conditions: ColumnElement[bool],
    ) -> int:
        stmt = (
            update(PaymentRecord)
            .where(
                PaymentRecord.order_id == order_id,
                PaymentRecord.payment_status.in_(list(expected_statuses)),
                *conditions,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

# Fin del archivo storefront/modules/payments/repositories/payment_record_repository.py
