# -*- coding: utf-8 -*-
"""
storefront/modules/payments/models/order_models.py

Modelo ORM de la tabla orders (vista mínima que consume el motor de pagos).

La orden pertenece al subsistema de checkout; el motor de pagos solo lee
customer_id/total/currency y escribe order_status como efecto de una
transición de pago.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, DateTime, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.shared.database.base import Base
from storefront.modules.payments.enums import OrderStatus
from storefront.modules.payments.utils.datetime_helpers import utcnow

if TYPE_CHECKING:
    from .payment_record_models import PaymentRecord


class Order(Base):
    """Orden de compra identificada por order_id (inmutable)."""

    __tablename__ = "orders"

    order_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)

    customer_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    total: Mapped[Decimal] = mapped_column(
        Numeric(15, 4),
        nullable=False,
        doc="Total de la orden en unidades mayores.",
    )

    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="INR")

    order_status: Mapped[OrderStatus] = mapped_column(
        OrderStatus.as_pg_enum(),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True,
    )

    date_added: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    date_modified: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=utcnow,
        onupdate=utcnow,
    )

    payment_record: Mapped[Optional["PaymentRecord"]] = relationship(
        "PaymentRecord",
        back_populates="order",
        uselist=False,
        lazy="noload",
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<Order id={self.order_id} status={self.order_status}>"


__all__ = ["Order"]

# Fin del archivo storefront/modules/payments/models/order_models.py
