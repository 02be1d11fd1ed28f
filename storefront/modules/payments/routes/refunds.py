# -*- coding: utf-8 -*-
"""
storefront/modules/payments/routes/refunds.py

Endpoint:
- POST /refund   reembolso total o parcial de un pago capturado

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from storefront.modules.payments.facades.payments import RefundCoordinator
from storefront.modules.payments.middleware import check_payment_api_rate_limit
from storefront.modules.payments.schemas import RefundRequest, RefundResponse

from .dependencies import get_refund_coordinator

router = APIRouter(tags=["payments:refunds"], dependencies=[Depends(check_payment_api_rate_limit)])


@router.post(
    "/refund",
    response_model=RefundResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_refund(
    body: RefundRequest,
    coordinator: RefundCoordinator = Depends(get_refund_coordinator),
) -> RefundResponse:
    result = await coordinator.refund(body.payment_id, body.amount, body.reason)
    return RefundResponse(
        refund_id=result.refund_id,
        payment_id=result.payment_id,
        order_id=result.order_id,
        amount=result.amount,
        currency=result.currency,
        status=result.gateway_status,
        refund_type=result.refund_type.value,
        payment_status=result.payment_status.value,
        refunded_total=result.refunded_total,
    )


__all__ = ["router"]

# Fin del archivo storefront/modules/payments/routes/refunds.py
