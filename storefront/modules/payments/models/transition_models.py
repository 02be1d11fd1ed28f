# -*- coding: utf-8 -*-
"""
storefront/modules/payments/models/transition_models.py

Bitácora de transiciones de estado del PaymentRecord. La escribe el
ledger en la misma transacción que el cambio de estado.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from storefront.shared.database.base import Base
from storefront.modules.payments.utils.datetime_helpers import utcnow


class PaymentTransition(Base):
    __tablename__ = "payment_transitions"

    id: Mapped[int] = mapped_column(primary_key=True)

    order_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    from_status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True, doc="None = sin registro previo")
    to_status: Mapped[str] = mapped_column(String(32), nullable=False)

    source: Mapped[str] = mapped_column(String(32), nullable=False)

    payment_order_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    payment_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    refund_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<PaymentTransition order_id={self.order_id} {self.from_status}->{self.to_status}>"


__all__ = ["PaymentTransition"]

# Fin del archivo storefront/modules/payments/models/transition_models.py
