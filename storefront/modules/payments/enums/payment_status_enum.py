# -*- coding: utf-8 -*-
"""
storefront/modules/payments/enums/payment_status_enum.py

Enum de estados del PaymentRecord y tabla de transiciones permitidas.
Sincronizado con el tipo ENUM de PostgreSQL: payment_status_enum.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from enum import StrEnum
from typing import Optional

from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM

from storefront.shared.database.base import as_pg_enum as _as_pg_enum


class PaymentStatus(StrEnum):
    """Estado del pago de una orden frente al gateway."""

    CREATED = "created"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CAPTURED = "captured"
    FAILED = "failed"
    REFUNDED = "refunded"

    __pg_enum_name__ = "payment_status_enum"

    @classmethod
    def as_pg_enum(
        cls,
        name: str = "payment_status_enum",
        schema: str | None = "public",
    ) -> PG_ENUM:
        return _as_pg_enum(cls, name=name, schema=schema)


# None representa "sin PaymentRecord" (estado NONE).
# FAILED → CAPTURED cubre una captura verificada que llega después
# de un intento fallido del mismo checkout.
ALLOWED_TRANSITIONS: dict[Optional[PaymentStatus], frozenset[PaymentStatus]] = {
    None: frozenset({PaymentStatus.CREATED}),
    PaymentStatus.CREATED: frozenset({
        PaymentStatus.AWAITING_CONFIRMATION,
        PaymentStatus.CAPTURED,
        PaymentStatus.FAILED,
    }),
    PaymentStatus.AWAITING_CONFIRMATION: frozenset({
        PaymentStatus.CAPTURED,
        PaymentStatus.FAILED,
    }),
    PaymentStatus.CAPTURED: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.FAILED: frozenset({PaymentStatus.CAPTURED}),
    PaymentStatus.REFUNDED: frozenset(),
}


def can_transition(current: Optional[str], target: str) -> bool:
    """True si `current → target` está permitido (acepta str o PaymentStatus)."""
    key = PaymentStatus(current) if current is not None else None
    return PaymentStatus(target) in ALLOWED_TRANSITIONS[key]


__all__ = ["PaymentStatus", "ALLOWED_TRANSITIONS", "can_transition"]

# Fin del archivo storefront/modules/payments/enums/payment_status_enum.py
