# -*- coding: utf-8 -*-
"""
GatewayClient contra httpx.MockTransport: reintentos, mapeo de errores,
timeout total e idempotency keys.
"""
import asyncio
import json

import httpx
import pytest

from storefront.modules.payments.errors import GatewayNotFound, GatewayRejected, GatewayUnavailable
from storefront.modules.payments.services import GatewayClient

from tests.factories import make_settings


def _client(handler, **overrides) -> GatewayClient:
    return GatewayClient(make_settings(**overrides), transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_create_remote_order_sends_minor_units_and_idempotency_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        seen["idempotency"] = request.headers.get("Idempotency-Key")
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(
            200,
            json={"id": "order_rzp_1", "amount": 50000, "currency": "INR", "status": "created", "receipt": "receipt_42"},
        )

    client = _client(handler)
    try:
        remote = await client.create_remote_order(50000, "INR", "receipt_42", {"order_id": "42"})
    finally:
        await client.aclose()

    assert remote.remote_order_id == "order_rzp_1"
    assert remote.amount_minor == 50000
    assert seen["path"] == "/v1/orders"
    assert seen["body"]["amount"] == 50000
    assert seen["body"]["payment_capture"] == 1
    assert seen["body"]["notes"] == {"order_id": "42"}
    assert seen["idempotency"] == "receipt_42"
    assert seen["auth"].startswith("Basic ")


@pytest.mark.asyncio
async def test_retries_transient_5xx_then_succeeds():
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        if calls["n"] < 3:
            return httpx.Response(503, json={"error": {"description": "busy"}})
        return httpx.Response(
            200,
            json={"id": "pay_1", "status": "captured", "amount": 50000, "currency": "INR", "order_id": "order_rzp_1"},
        )

    client = _client(handler)
    try:
        payment = await client.fetch_payment("pay_1")
    finally:
        await client.aclose()

    assert calls["n"] == 3
    assert payment.status == "captured"
    assert payment.remote_order_id == "order_rzp_1"
    assert payment.metadata == {}


@pytest.mark.asyncio
async def test_exhausted_retries_surface_gateway_unavailable():
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        return httpx.Response(502)

    client = _client(handler, razorpay_max_retries=2)
    try:
        with pytest.raises(GatewayUnavailable):
            await client.fetch_payment("pay_1")
    finally:
        await client.aclose()

    assert calls["n"] == 2


@pytest.mark.asyncio
async def test_transport_errors_are_retried_then_unavailable():
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    try:
        with pytest.raises(GatewayUnavailable):
            await client.fetch_payment("pay_1")
    finally:
        await client.aclose()

    assert calls["n"] == 3


@pytest.mark.asyncio
async def test_validation_errors_are_not_retried():
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        return httpx.Response(400, json={"error": {"code": "BAD_REQUEST_ERROR", "description": "amount too low"}})

    client = _client(handler)
    try:
        with pytest.raises(GatewayRejected) as exc:
            await client.create_refund("pay_1", 100)
    finally:
        await client.aclose()

    assert calls["n"] == 1
    assert exc.value.detail == "amount too low"
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_not_found_maps_to_gateway_not_found():
    client = _client(lambda request: httpx.Response(404, json={"error": {"description": "not found"}}))
    try:
        with pytest.raises(GatewayNotFound):
            await client.fetch_payment("pay_missing")
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_non_json_success_is_unavailable():
    client = _client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    try:
        with pytest.raises(GatewayUnavailable):
            await client.fetch_payment("pay_1")
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_total_timeout_maps_to_gateway_unavailable():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200, json={})

    client = _client(handler, razorpay_timeout_ms=50)
    try:
        with pytest.raises(GatewayUnavailable):
            await client.fetch_payment("pay_1")
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_create_refund_full_omits_amount_and_fills_payment_id():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        seen["idempotency"] = request.headers.get("Idempotency-Key")
        return httpx.Response(200, json={"id": "rfnd_1", "amount": 50000, "currency": "INR", "status": "processed"})

    client = _client(handler)
    try:
        refund = await client.create_refund("pay_1", None, {"order_id": "42"}, idempotency_key="refund_pay_1_0_50000")
    finally:
        await client.aclose()

    assert seen["path"] == "/v1/payments/pay_1/refund"
    assert "amount" not in seen["body"]
    assert seen["idempotency"] == "refund_pay_1_0_50000"
    assert refund.payment_id == "pay_1"
    assert refund.amount_minor == 50000
# Fin del archivo
