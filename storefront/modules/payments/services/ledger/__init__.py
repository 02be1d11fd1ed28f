# -*- coding: utf-8 -*-
"""
storefront/modules/payments/services/ledger/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .order_ledger import OrderLedger

__all__ = ["OrderLedger"]

# Fin del archivo storefront/modules/payments/services/ledger/__init__.py
