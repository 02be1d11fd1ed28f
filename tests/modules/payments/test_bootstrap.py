# -*- coding: utf-8 -*-
import httpx
import pytest

from storefront.modules.payments.bootstrap import build_payment_services

from tests.factories import make_settings


@pytest.mark.asyncio
async def test_build_payment_services_wires_one_graph(session_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"id": "order_rzp_9", "amount": 100, "currency": "INR", "status": "created", "receipt": "receipt_9"},
        )

    services = build_payment_services(make_settings(), session_factory, transport=httpx.MockTransport(handler))
    try:
        assert services.orchestrator.receipt_for(9) == "receipt_9"
        remote = await services.gateway.create_remote_order(100, "INR", "receipt_9")
        assert remote.remote_order_id == "order_rzp_9"
    finally:
        await services.aclose()
