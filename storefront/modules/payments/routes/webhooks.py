# -*- coding: utf-8 -*-
"""
storefront/modules/payments/routes/webhooks.py

Webhook endpoint del gateway.

Endpoint:
- POST /webhook

Siempre 200 salvo firma inválida (401) o rate limit (429). El body se
lee crudo: la firma se verifica sobre esos bytes exactos.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status

from storefront.shared.http_utils.request_meta import get_client_ip
from storefront.modules.payments.bootstrap import PaymentServices
from storefront.modules.payments.facades.webhooks import WebhookSignatureError, handle_webhook
from storefront.modules.payments.middleware import check_webhook_rate_limit

from .dependencies import get_payment_services

router = APIRouter(tags=["payments:webhooks"])


@router.post(
    "/webhook",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(check_webhook_rate_limit)],
)
async def gateway_webhook(
    request: Request,
    services: PaymentServices = Depends(get_payment_services),
) -> Dict[str, Any]:
    raw_body = await request.body()

    try:
        return await handle_webhook(
            raw_body=raw_body,
            headers=request.headers,
            verifier=services.verifier,
            orchestrator=services.orchestrator,
            ledger=services.ledger,
            provider=services.settings.payments_provider,
            client_ip=get_client_ip(request),
        )
    except WebhookSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"success": False, "error": "invalid_signature"},
        )


__all__ = ["router"]

# Fin del archivo storefront/modules/payments/routes/webhooks.py
