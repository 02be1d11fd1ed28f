# -*- coding: utf-8 -*-
"""
storefront/modules/payments/schemas/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .checkout_schemas import (
    CreateOrderRequest,
    CreateOrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from .common_schemas import ErrorResponse, MoneyAmount
from .payment_status_schemas import PaymentStatusResponse
from .refund_schemas import RefundRequest, RefundResponse

__all__ = [
    "CreateOrderRequest",
    "CreateOrderResponse",
    "ErrorResponse",
    "MoneyAmount",
    "PaymentStatusResponse",
    "RefundRequest",
    "RefundResponse",
    "VerifyPaymentRequest",
    "VerifyPaymentResponse",
]

# Fin del archivo storefront/modules/payments/schemas/__init__.py
