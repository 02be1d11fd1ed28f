# -*- coding: utf-8 -*-
"""
storefront/modules/payments/facades/payments/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .payment_orchestrator import PaymentOrchestrator, TransitionOutcome
from .refund_coordinator import RefundCoordinator, RefundResult, refund_idempotency_key

__all__ = [
    "PaymentOrchestrator",
    "RefundCoordinator",
    "RefundResult",
    "TransitionOutcome",
    "refund_idempotency_key",
]

# Fin del archivo storefront/modules/payments/facades/payments/__init__.py
