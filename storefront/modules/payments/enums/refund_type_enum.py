# -*- coding: utf-8 -*-
"""
storefront/modules/payments/enums/refund_type_enum.py

Clasificación de reembolsos y origen de las transiciones del ledger.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from enum import StrEnum


class RefundType(StrEnum):
    """FULL cuando el reembolso completa el monto capturado; PARTIAL en otro caso."""

    FULL = "full"
    PARTIAL = "partial"


class TransitionSource(StrEnum):
    """Camino que originó una transición de estado."""

    CHECKOUT = "checkout"
    CLIENT_CONFIRMATION = "client_confirmation"
    WEBHOOK = "webhook"
    REFUND_API = "refund_api"


__all__ = ["RefundType", "TransitionSource"]

# Fin del archivo storefront/modules/payments/enums/refund_type_enum.py
