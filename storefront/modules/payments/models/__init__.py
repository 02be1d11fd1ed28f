# -*- coding: utf-8 -*-
"""
storefront/modules/payments/models/__init__.py

Registra todos los modelos del módulo en Base.metadata.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .order_models import Order
from .payment_record_models import PaymentRecord
from .refund_models import PaymentRefund
from .transition_models import PaymentTransition
from .webhook_event_models import WebhookEvent

__all__ = [
    "Order",
    "PaymentRecord",
    "PaymentRefund",
    "PaymentTransition",
    "WebhookEvent",
]

# Fin del archivo storefront/modules/payments/models/__init__.py
