# -*- coding: utf-8 -*-
"""
storefront/modules/payments/repositories/transition_repository.py

Repositorio para la bitácora payment_transitions.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.shared.database.repository import BaseRepository
from storefront.modules.payments.models import PaymentTransition


class PaymentTransitionRepository(BaseRepository[PaymentTransition]):
    def __init__(self) -> None:
        super().__init__(PaymentTransition)

    async def list_by_order(self, session: AsyncSession, order_id: int) -> Sequence[PaymentTransition]:
        stmt = (
            select(PaymentTransition)
            .where(PaymentTransition.order_id == order_id)
            .order_by(PaymentTransition.id.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

# Fin del archivo storefront/modules/payments/repositories/transition_repository.py
