# -*- coding: utf-8 -*-
"""
storefront/modules/payments/routes/__init__.py

Ensamblador de rutas del módulo Payments.

Incluye:
- POST /create-order
- POST /verify-payment
- POST /webhook
- POST /refund
- GET  /status/{order_id}

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from fastapi import APIRouter

from .checkout import router as checkout_router
from .payment_status import router as payment_status_router
from .refunds import router as refunds_router
from .webhooks import router as webhooks_router

router = APIRouter()

router.include_router(checkout_router)
router.include_router(webhooks_router)
router.include_router(refunds_router)
router.include_router(payment_status_router)

__all__ = ["router"]

# Fin del archivo storefront/modules/payments/routes/__init__.py
