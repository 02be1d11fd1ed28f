# -*- coding: utf-8 -*-
"""
storefront/modules/payments/repositories/order_repository.py

Repositorio para la tabla orders (lectura y cambio de order_status).

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.shared.database.repository import BaseRepository
from storefront.modules.payments.enums import OrderStatus
from storefront.modules.payments.models import Order
from storefront.modules.payments.utils.datetime_helpers import utcnow


class OrderRepository(BaseRepository[Order]):
    def __init__(self) -> None:
        super().__init__(Order)

    async def update_status(
        self,
        session: AsyncSession,
        order_id: int,
        status: OrderStatus,
    ) -> int:
        """Escribe order_status; devuelve filas afectadas (0 si la orden no existe)."""
        stmt = (
            update(Order)
            .where(Order.order_id == order_id)
            .values(order_status=status, date_modified=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

# Fin del archivo storefront/modules/payments/repositories/order_repository.py
