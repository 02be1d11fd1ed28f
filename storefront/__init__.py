# -*- coding: utf-8 -*-
"""
storefront/__init__.py

Backend de pagos de Storefront: ciclo de vida de pagos con Razorpay y
reconciliación de webhooks.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

__version__ = "1.0.0"
