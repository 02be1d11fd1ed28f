# -*- coding: utf-8 -*-
"""
storefront/modules/payments/repositories/refund_repository.py

Repositorio para la tabla payment_refunds.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.shared.database.repository import BaseRepository
from storefront.modules.payments.models import PaymentRefund


class PaymentRefundRepository(BaseRepository[PaymentRefund]):
    def __init__(self) -> None:
        super().__init__(PaymentRefund)

    async def get_by_refund_id(self, session: AsyncSession, refund_id: str) -> Optional[PaymentRefund]:
        return await self.first_by(session, PaymentRefund.refund_id == refund_id)

    async def list_by_payment(self, session: AsyncSession, payment_id: str) -> Sequence[PaymentRefund]:
        stmt = (
            select(PaymentRefund)
            .where(PaymentRefund.payment_id == payment_id)
            .order_by(PaymentRefund.id.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

# Fin del archivo storefront/modules/payments/repositories/refund_repository.py
