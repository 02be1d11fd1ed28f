# -*- coding: utf-8 -*-
"""
storefront/modules/payments/schemas/payment_status_schemas.py

Consulta del estado de pago de una orden.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .common_schemas import MoneyAmount


class PaymentStatusResponse(BaseModel):
    order_id: int
    order_status: str
    payment_status: Optional[str] = None
    razorpay_order_id: Optional[str] = None
    payment_id: Optional[str] = None
    amount: Optional[MoneyAmount] = None
    currency: Optional[str] = None
    refund_id: Optional[str] = None
    refund_amount: Optional[MoneyAmount] = None
    failure_reason: Optional[str] = None
    captured_at: Optional[datetime] = None


__all__ = ["PaymentStatusResponse"]

# Fin del archivo storefront/modules/payments/schemas/payment_status_schemas.py
