# -*- coding: utf-8 -*-
"""
storefront/modules/payments/models/payment_record_models.py

Modelo ORM para la tabla payment_records: estado vigente del pago de una
orden frente al gateway. Una fila por order_id; nunca se borra.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, DateTime, ForeignKey, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.shared.database.base import Base
from storefront.modules.payments.enums import PaymentStatus
from storefront.modules.payments.utils.datetime_helpers import utcnow

if TYPE_CHECKING:
    from .order_models import Order


class PaymentRecord(Base):
    """Pago de una orden con el gateway (razorpay)."""

    __tablename__ = "payment_records"

    id: Mapped[int] = mapped_column(primary_key=True)

    order_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("orders.order_id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
        doc="Orden local; como máximo un registro autoritativo por orden.",
    )

    payment_provider: Mapped[str] = mapped_column(String(32), nullable=False, default="razorpay")

    payment_order_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
        index=True,
        doc="ID de la orden remota (order_...).",
    )

    payment_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
        unique=True,
        doc="ID del pago remoto (pay_...). Inmutable una vez capturado.",
    )

    payment_status: Mapped[PaymentStatus] = mapped_column(
        PaymentStatus.as_pg_enum(),
        nullable=False,
        index=True,
    )

    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        doc="Monto solicitado; tras la captura, el monto autoritativo del gateway.",
    )

    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    refund_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    refund_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0.00"),
        server_default="0",
        doc="Acumulado reembolsado.",
    )

    failure_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    captured_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    date_added: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    date_modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    order: Mapped["Order"] = relationship(
        "Order",
        back_populates="payment_record",
        lazy="noload",
    )

    @property
    def refundable_amount(self) -> Decimal:
        return Decimal(self.amount) - Decimal(self.refund_amount or 0)

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return (
            f"<PaymentRecord order_id={self.order_id} status={self.payment_status} "
            f"payment_id={self.payment_id}>"
        )


__all__ = ["PaymentRecord"]

# Fin del archivo storefront/modules/payments/models/payment_record_models.py
