# -*- coding: utf-8 -*-
"""
storefront/modules/payments/schemas/checkout_schemas.py

Esquemas de creación de orden remota y confirmación del cliente.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .common_schemas import MoneyAmount


class CreateOrderRequest(BaseModel):
    order_id: int = Field(gt=0, description="ID de la orden local.")
    amount: Decimal = Field(description="Monto a cobrar; debe coincidir con el total de la orden.")
    currency: Optional[str] = Field(
        default=None,
        min_length=3,
        max_length=3,
        description="ISO 4217; por defecto RAZORPAY_CURRENCY.",
    )
    notes: Optional[dict[str, Any]] = Field(default=None, description="Notas extra para el gateway.")

    @field_validator("currency")
    @classmethod
    def _upper(cls, value: Optional[str]) -> Optional[str]:
        return value.upper() if value else value


class CreateOrderResponse(BaseModel):
    razorpay_order_id: str
    amount: MoneyAmount
    amount_minor: int = Field(description="Monto en unidades menores, como lo espera el checkout del gateway.")
    currency: str
    receipt: str
    status: str


class VerifyPaymentRequest(BaseModel):
    razorpay_order_id: str = Field(min_length=1)
    razorpay_payment_id: str = Field(min_length=1)
    razorpay_signature: str = Field(min_length=1)
    order_id: int = Field(gt=0)


class VerifyPaymentResponse(BaseModel):
    status: str
    payment_id: str
    order_id: int
    amount: MoneyAmount
    currency: str


__all__ = [
    "CreateOrderRequest",
    "CreateOrderResponse",
    "VerifyPaymentRequest",
    "VerifyPaymentResponse",
]

# Fin del archivo storefront/modules/payments/schemas/checkout_schemas.py
