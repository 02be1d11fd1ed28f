# -*- coding: utf-8 -*-
"""
Rate limiter de ventana deslizante y su dependencia FastAPI.
"""
from types import SimpleNamespace

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from storefront.modules.payments.middleware import (
    SlidingWindowRateLimiter,
    check_payment_api_rate_limit,
    check_webhook_rate_limit,
)
from storefront.modules.payments.middleware import rate_limiter as rate_limiter_module

from tests.factories import make_settings


def _request(ip: str = "198.51.100.7") -> Request:
    return Request({"type": "http", "method": "POST", "path": "/webhook", "headers": [], "client": (ip, 1234)})


def test_allows_up_to_limit_per_key():
    limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=60, name="t")

    assert limiter.is_allowed("a") == (True, 1)
    assert limiter.is_allowed("a") == (True, 0)
    assert limiter.is_allowed("a") == (False, 0)
    assert limiter.is_allowed("b")[0] is True
    assert 1 <= limiter.get_retry_after("a") <= 61


def test_window_slides(monkeypatch):
    now = {"t": 1000.0}
    monkeypatch.setattr(rate_limiter_module, "time", SimpleNamespace(monotonic=lambda: now["t"]))
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=1, name="t")

    assert limiter.is_allowed("a")[0]
    assert not limiter.is_allowed("a")[0]
    now["t"] += 1.5
    assert limiter.is_allowed("a")[0]


def test_reset_forgets_everything():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60)
    limiter.is_allowed("a")
    limiter.reset()
    assert limiter.is_allowed("a")[0]
    assert limiter.get_retry_after("nobody") == 0


@pytest.mark.asyncio
async def test_webhook_dependency_raises_429_with_retry_after(monkeypatch):
    settings = make_settings(webhook_rate_limit_enabled=True, webhook_rate_limit_requests=1)
    monkeypatch.setattr(rate_limiter_module, "get_payments_settings", lambda: settings)

    await check_webhook_rate_limit(_request())
    with pytest.raises(HTTPException) as exc:
        await check_webhook_rate_limit(_request())

    assert exc.value.status_code == 429
    assert exc.value.detail["error"] == "rate_limit_exceeded"
    assert int(exc.value.headers["Retry-After"]) >= 1
    # Otra IP tiene su propio cupo
    await check_webhook_rate_limit(_request("198.51.100.8"))


@pytest.mark.asyncio
async def test_disabled_limiter_never_blocks(monkeypatch):
    settings = make_settings(api_rate_limit_enabled=False, api_rate_limit_requests=1)
    monkeypatch.setattr(rate_limiter_module, "get_payments_settings", lambda: settings)

    for _ in range(5):
        await check_payment_api_rate_limit(_request())
# Fin del archivo
