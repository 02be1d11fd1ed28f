# -*- coding: utf-8 -*-
"""
storefront/modules/payments/repositories/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .order_repository import OrderRepository
from .payment_record_repository import PaymentRecordRepository
from .refund_repository import PaymentRefundRepository
from .transition_repository import PaymentTransitionRepository
from .webhook_event_repository import WebhookEventRepository

__all__ = [
    "OrderRepository",
    "PaymentRecordRepository",
    "PaymentRefundRepository",
    "PaymentTransitionRepository",
    "WebhookEventRepository",
]

# Fin del archivo storefront/modules/payments/repositories/__init__.py
