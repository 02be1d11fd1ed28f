# -*- coding: utf-8 -*-
"""
storefront/modules/payments/enums/order_status_enum.py

Enum de estados de la orden que el flujo de pagos puede escribir.
Sincronizado con el tipo ENUM de PostgreSQL: order_status_enum.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from enum import StrEnum

from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM

from storefront.shared.database.base import as_pg_enum as _as_pg_enum

from .payment_status_enum import PaymentStatus


class OrderStatus(StrEnum):
    """Estado de la orden de compra."""

    PENDING = "pending"
    AWAITING_PAYMENT = "awaiting_payment"
    PAID = "paid"
    PAYMENT_FAILED = "payment_failed"
    REFUNDED = "refunded"
    CANCELLED = "cancelled"

    __pg_enum_name__ = "order_status_enum"

    @classmethod
    def as_pg_enum(
        cls,
        name: str = "order_status_enum",
        schema: str | None = "public",
    ) -> PG_ENUM:
        return _as_pg_enum(cls, name=name, schema=schema)


# Estado de orden que acompaña a cada estado de pago (lock-step).
# AWAITING_CONFIRMATION no cambia la orden: sigue esperando el pago.
ORDER_STATUS_FOR_PAYMENT: dict[PaymentStatus, OrderStatus] = {
    PaymentStatus.CREATED: OrderStatus.AWAITING_PAYMENT,
    PaymentStatus.AWAITING_CONFIRMATION: OrderStatus.AWAITING_PAYMENT,
    PaymentStatus.CAPTURED: OrderStatus.PAID,
    PaymentStatus.FAILED: OrderStatus.PAYMENT_FAILED,
    PaymentStatus.REFUNDED: OrderStatus.REFUNDED,
}


__all__ = ["OrderStatus", "ORDER_STATUS_FOR_PAYMENT"]

# Fin del archivo storefront/modules/payments/enums/order_status_enum.py
