# -*- coding: utf-8 -*-
"""
storefront/modules/payments/middleware/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .rate_limiter import (
    SlidingWindowRateLimiter,
    check_payment_api_rate_limit,
    check_webhook_rate_limit,
    reset_rate_limiters,
)

__all__ = [
    "SlidingWindowRateLimiter",
    "check_payment_api_rate_limit",
    "check_webhook_rate_limit",
    "reset_rate_limiters",
]

# Fin del archivo storefront/modules/payments/middleware/__init__.py
