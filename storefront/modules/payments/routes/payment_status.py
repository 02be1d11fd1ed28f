# -*- coding: utf-8 -*-
"""
storefront/modules/payments/routes/payment_status.py

Endpoint:
- GET /status/{order_id}   estado de la orden y de su pago

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.modules.payments.bootstrap import PaymentServices
from storefront.modules.payments.enums import OrderStatus, PaymentStatus
from storefront.modules.payments.errors import OrderNotFound
from storefront.modules.payments.middleware import check_payment_api_rate_limit
from storefront.modules.payments.schemas import PaymentStatusResponse
from storefront.modules.payments.utils.datetime_helpers import ensure_utc

from .dependencies import get_payment_services

router = APIRouter(tags=["payments:status"], dependencies=[Depends(check_payment_api_rate_limit)])


@router.get("/status/{order_id}", response_model=PaymentStatusResponse)
async def get_payment_status(
    order_id: int,
    services: PaymentServices = Depends(get_payment_services),
) -> PaymentStatusResponse:
    async with services.ledger.transaction() as session:
        order = await services.ledger.get_order(order_id, session)
        if order is None:
            raise OrderNotFound(f"order_id={order_id}")
        record = await services.ledger.get_payment_record(order_id, session)

    response = PaymentStatusResponse(
        order_id=order.order_id,
        order_status=OrderStatus(order.order_status).value,
    )
    if record is None:
        return response

    return response.model_copy(
        update={
            "payment_status": PaymentStatus(record.payment_status).value,
            "razorpay_order_id": record.payment_order_id,
            "payment_id": record.payment_id,
            "amount": record.amount,
            "currency": record.currency,
            "refund_id": record.refund_id,
            "refund_amount": record.refund_amount,
            "failure_reason": record.failure_reason,
            "captured_at": ensure_utc(record.captured_at),
        }
    )


__all__ = ["router"]

# Fin del archivo storefront/modules/payments/routes/payment_status.py
