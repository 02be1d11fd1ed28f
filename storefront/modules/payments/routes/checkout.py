# -*- coding: utf-8 -*-
"""
storefront/modules/payments/routes/checkout.py

Rutas del checkout con el gateway.

Endpoints:
- POST /create-order     crea (o reutiliza) la orden remota
- POST /verify-payment   confirma un pago desde el cliente

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from storefront.shared.http_utils.request_meta import get_client_ip
from storefront.modules.payments.enums import PaymentStatus
from storefront.modules.payments.facades.payments import PaymentOrchestrator
from storefront.modules.payments.middleware import check_payment_api_rate_limit
from storefront.modules.payments.schemas import (
    CreateOrderRequest,
    CreateOrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from storefront.modules.payments.utils.amounts import to_minor

from .dependencies import get_orchestrator

router = APIRouter(tags=["payments:checkout"], dependencies=[Depends(check_payment_api_rate_limit)])


@router.post(
    "/create-order",
    response_model=CreateOrderResponse,
    status_code=status.HTTP_200_OK,
)
async def create_order(
    body: CreateOrderRequest,
    orchestrator: PaymentOrchestrator = Depends(get_orchestrator),
) -> CreateOrderResponse:
    outcome = await orchestrator.create_order(
        body.order_id,
        body.amount,
        body.currency,
        body.notes,
    )
    record = outcome.record
    return CreateOrderResponse(
        razorpay_order_id=record.payment_order_id,
        amount=record.amount,
        amount_minor=to_minor(record.amount),
        currency=record.currency,
        receipt=orchestrator.receipt_for(record.order_id),
        status=PaymentStatus(record.payment_status).value,
    )


@router.post(
    "/verify-payment",
    response_model=VerifyPaymentResponse,
    status_code=status.HTTP_200_OK,
)
async def verify_payment(
    body: VerifyPaymentRequest,
    request: Request,
    orchestrator: PaymentOrchestrator = Depends(get_orchestrator),
) -> VerifyPaymentResponse:
    outcome = await orchestrator.confirm_payment(
        body.order_id,
        body.razorpay_order_id,
        body.razorpay_payment_id,
        body.razorpay_signature,
        client_ip=get_client_ip(request),
    )
    record = outcome.record
    return VerifyPaymentResponse(
        status=PaymentStatus(record.payment_status).value,
        payment_id=record.payment_id,
        order_id=record.order_id,
        amount=record.amount,
        currency=record.currency,
    )


__all__ = ["router"]

# Fin del archivo storefront/modules/payments/routes/checkout.py
