# -*- coding: utf-8 -*-
"""
storefront/modules/payments/models/refund_models.py

Reembolsos emitidos por el gateway. refund_id es único: la API y el
webhook refund.processed pueden reportar el mismo reembolso y solo el
primero en llegar lo registra.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import BigInteger, DateTime, ForeignKey, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from storefront.shared.database.base import Base
from storefront.modules.payments.utils.datetime_helpers import utcnow


class PaymentRefund(Base):
    __tablename__ = "payment_refunds"

    id: Mapped[int] = mapped_column(primary_key=True)

    refund_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)

    payment_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    order_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("orders.order_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    refund_type: Mapped[str] = mapped_column(String(16), nullable=False, doc="full | partial")
    gateway_status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    source: Mapped[str] = mapped_column(String(32), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<PaymentRefund refund_id={self.refund_id} amount={self.amount}>"


__all__ = ["PaymentRefund"]

# Fin del archivo storefront/modules/payments/models/refund_models.py
