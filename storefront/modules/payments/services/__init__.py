# -*- coding: utf-8 -*-
"""
storefront/modules/payments/services/__init__.py

Servicios hoja del motor de pagos: cliente del gateway, verificador de
firmas y ledger transaccional.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .gateway import GatewayClient, RemoteOrder, RemotePayment, RemoteRefund
from .ledger import OrderLedger
from .webhooks import SignatureVerifier

__all__ = [
    "GatewayClient",
    "OrderLedger",
    "RemoteOrder",
    "RemotePayment",
    "RemoteRefund",
    "SignatureVerifier",
]

# Fin del archivo storefront/modules/payments/services/__init__.py
