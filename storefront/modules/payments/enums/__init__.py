# -*- coding: utf-8 -*-
"""
storefront/modules/payments/enums/__init__.py

Superficie de exportación de enums del módulo Payments.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .currency_enum import Currency
from .order_status_enum import ORDER_STATUS_FOR_PAYMENT, OrderStatus
from .payment_status_enum import ALLOWED_TRANSITIONS, PaymentStatus, can_transition
from .refund_type_enum import RefundType, TransitionSource
from .webhook_event_type_enum import WebhookEventType

__all__ = [
    "ALLOWED_TRANSITIONS",
    "Currency",
    "ORDER_STATUS_FOR_PAYMENT",
    "OrderStatus",
    "PaymentStatus",
    "RefundType",
    "TransitionSource",
    "WebhookEventType",
    "can_transition",
]

# Fin del archivo storefront/modules/payments/enums/__init__.py
