# -*- coding: utf-8 -*-
import httpx
import pytest

from storefront.shared.core.http_retry_utils import compute_backoff_delay, retry_with_backoff


def test_backoff_grows_and_is_capped():
    assert 0.1 <= compute_backoff_delay(0, 0.1, 1.0) <= 0.12
    assert 0.4 <= compute_backoff_delay(2, 0.1, 1.0) <= 0.48
    assert 1.0 <= compute_backoff_delay(10, 0.1, 1.0) <= 1.2


@pytest.mark.asyncio
async def test_returns_non_retryable_response_immediately():
    calls = []

    async def send():
        calls.append(1)
        return httpx.Response(400)

    resp = await retry_with_backoff(send, max_retries=3, base_delay=0.001)

    assert resp.status_code == 400
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_retries_then_returns_last_retryable_response():
    reasons = []

    async def send():
        return httpx.Response(502)

    resp = await retry_with_backoff(
        send,
        max_retries=2,
        base_delay=0.001,
        on_retry=lambda attempt, reason: reasons.append((attempt, reason)),
    )

    assert resp.status_code == 502
    assert reasons == [(1, "http_502"), (2, "http_502")]


@pytest.mark.asyncio
async def test_transport_error_is_raised_after_last_attempt():
    calls = []

    async def send():
        calls.append(1)
        raise httpx.ConnectError("refused")

    with pytest.raises(httpx.ConnectError):
        await retry_with_backoff(send, max_retries=1, base_delay=0.001)
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_rejects_invalid_arguments():
    async def send():
        return httpx.Response(200)

    with pytest.raises(ValueError):
        await retry_with_backoff(send, max_retries=-1)
    with pytest.raises(ValueError):
        await retry_with_backoff(send, base_delay=0)
