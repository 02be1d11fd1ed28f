# -*- coding: utf-8 -*-
"""
storefront/modules/payments/schemas/refund_schemas.py

Esquemas para reembolsos.

El monto se valida en RefundCoordinator (InvalidRefundAmount → 400),
no aquí, para que la regla viva en un solo lugar.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from .common_schemas import MoneyAmount


class RefundRequest(BaseModel):
    payment_id: str = Field(min_length=1, description="ID del pago remoto (pay_...).")
    amount: Optional[Decimal] = Field(
        default=None,
        description="Monto a reembolsar; si se omite, el saldo restante.",
    )
    reason: Optional[str] = Field(default=None, max_length=255)


class RefundResponse(BaseModel):
    refund_id: str
    payment_id: str
    order_id: int
    amount: MoneyAmount
    currency: str
    status: Optional[str] = Field(description="Estado del refund en el gateway.")
    refund_type: str
    payment_status: str
    refunded_total: MoneyAmount


__all__ = ["RefundRequest", "RefundResponse"]

# Fin del archivo storefront/modules/payments/schemas/refund_schemas.py
