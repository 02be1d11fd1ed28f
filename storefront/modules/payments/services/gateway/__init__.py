# -*- coding: utf-8 -*-
"""
storefront/modules/payments/services/gateway/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .gateway_client import (
    GatewayClient,
    RemoteOrder,
    RemotePayment,
    RemoteRefund,
    parse_remote_payment,
    parse_remote_refund,
)

__all__ = [
    "GatewayClient",
    "RemoteOrder",
    "RemotePayment",
    "RemoteRefund",
    "parse_remote_payment",
    "parse_remote_refund",
]

# Fin del archivo storefront/modules/payments/services/gateway/__init__.py
