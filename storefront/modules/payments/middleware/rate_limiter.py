# -*- coding: utf-8 -*-
"""
storefront/modules/payments/middleware/rate_limiter.py

Rate limiting por IP para las rutas de pagos.

Ventana deslizante en memoria (por réplica):
- webhooks: WEBHOOK_RATE_LIMIT_REQUESTS por WEBHOOK_RATE_LIMIT_WINDOW segundos
- API de pagos: RAZORPAY_RATE_LIMIT_MAX por RAZORPAY_RATE_LIMIT_WINDOW ms

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from fastapi import HTTPException, Request, status

from storefront.shared.config.settings_payments import get_payments_settings
from storefront.shared.http_utils.request_meta import get_client_ip
from storefront.modules.payments.metrics import payment_metrics

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """Rate limiter con ventana deslizante en memoria, llave = IP."""

    def __init__(self, max_requests: int, window_seconds: float, name: str = "default"):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.name = name
        self._requests: Dict[str, List[float]] = defaultdict(list)

    def _cleanup_old_requests(self, key: str, current_time: float) -> None:
        cutoff = current_time - self.window_seconds
        self._requests[key] = [ts for ts in self._requests[key] if ts > cutoff]

    def is_allowed(self, key: str) -> Tuple[bool, int]:
        """
        Verifica si la llave puede hacer una request y la registra si sí.

        Returns:
            Tuple[is_allowed, remaining_requests]
        """
        current_time = time.monotonic()
        self._cleanup_old_requests(key, current_time)

        current_count = len(self._requests[key])
        if current_count >= self.max_requests:
            return False, 0

        self._requests[key].append(current_time)
        return True, self.max_requests - current_count - 1

    def get_retry_after(self, key: str) -> int:
        """Segundos hasta que la llave vuelva a tener cupo."""
        if not self._requests[key]:
            return 0
        oldest_request = min(self._requests[key])
        retry_after = int(oldest_request + self.window_seconds - time.monotonic()) + 1
        return max(1, retry_after)

    def reset(self) -> None:
        self._requests.clear()


_webhook_rate_limiter: Optional[SlidingWindowRateLimiter] = None
_api_rate_limiter: Optional[SlidingWindowRateLimiter] = None


def get_webhook_rate_limiter() -> SlidingWindowRateLimiter:
    global _webhook_rate_limiter
    if _webhook_rate_limiter is None:
        settings = get_payments_settings()
        _webhook_rate_limiter = SlidingWindowRateLimiter(
            settings.webhook_rate_limit_requests,
            settings.webhook_rate_limit_window_seconds,
            name="webhook",
        )
    return _webhook_rate_limiter


def get_api_rate_limiter() -> SlidingWindowRateLimiter:
    global _api_rate_limiter
    if _api_rate_limiter is None:
        settings = get_payments_settings()
        _api_rate_limiter = SlidingWindowRateLimiter(
            settings.api_rate_limit_requests,
            settings.api_rate_limit_window_seconds,
            name="payments_api",
        )
    return _api_rate_limiter


def reset_rate_limiters() -> None:
    """Olvida los limiters (se reconstruyen con la configuración vigente)."""
    global _webhook_rate_limiter, _api_rate_limiter
    _webhook_rate_limiter = None
    _api_rate_limiter = None


def _enforce(limiter: SlidingWindowRateLimiter, request: Request) -> None:
    client_ip = get_client_ip(request)
    allowed, _remaining = limiter.is_allowed(client_ip)
    if allowed:
        return

    retry_after = limiter.get_retry_after(client_ip)
    logger.warning(f"Rate limit '{limiter.name}' excedido para IP {client_ip}. Retry after {retry_after}s")
    if limiter.name == "webhook":
        payment_metrics.observe_webhook_rejected(get_payments_settings().payments_provider, "rate_limited")
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail={
            "error": "rate_limit_exceeded",
            "message": f"Too many requests. Retry after {retry_after} seconds.",
            "retry_after_seconds": retry_after,
        },
        headers={"Retry-After": str(retry_after)},
    )


async def check_webhook_rate_limit(request: Request) -> None:
    """
    Dependencia FastAPI para webhooks.

    Uso:
        @router.post("/webhook", dependencies=[Depends(check_webhook_rate_limit)])
    """
    if not get_payments_settings().webhook_rate_limit_enabled:
        return
    _enforce(get_webhook_rate_limiter(), request)


async def check_payment_api_rate_limit(request: Request) -> None:
    """Dependencia FastAPI para /create-order, /verify-payment, /refund y /status."""
    if not get_payments_settings().api_rate_limit_enabled:
        return
    _enforce(get_api_rate_limiter(), request)


__all__ = [
    "SlidingWindowRateLimiter",
    "check_payment_api_rate_limit",
    "check_webhook_rate_limit",
    "get_api_rate_limiter",
    "get_webhook_rate_limiter",
    "reset_rate_limiters",
]

# Fin del archivo storefront/modules/payments/middleware/rate_limiter.py
