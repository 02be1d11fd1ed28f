# -*- coding: utf-8 -*-
"""
storefront/modules/payments/enums/webhook_event_type_enum.py

Eventos de webhook que el motor de pagos sabe aplicar.
Cualquier otro `event` se registra y se ignora con 200.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from enum import StrEnum
from typing import Optional


class WebhookEventType(StrEnum):
    PAYMENT_AUTHORIZED = "payment.authorized"
    PAYMENT_CAPTURED = "payment.captured"
    PAYMENT_FAILED = "payment.failed"
    REFUND_PROCESSED = "refund.processed"

    @classmethod
    def parse(cls, raw: object) -> Optional["WebhookEventType"]:
        """Devuelve el miembro correspondiente o None si el evento no está soportado."""
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip())
        except ValueError:
            return None


__all__ = ["WebhookEventType"]

# Fin del archivo storefront/modules/payments/enums/webhook_event_type_enum.py
