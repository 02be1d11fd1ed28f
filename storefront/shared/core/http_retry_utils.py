# -*- coding: utf-8 -*-
"""
storefront/shared/core/http_retry_utils.py

Reintentos con backoff exponencial y jitter para llamadas HTTP salientes.

Solo se reintentan fallas transitorias: errores de transporte, timeouts
y códigos en `retry_on_status` (por defecto 429 y 5xx). Cualquier otra
respuesta se devuelve al llamador tal cual para que la clasifique.

Uso:
    response = await retry_with_backoff(
        client.post,
        "/orders",
        json=payload,
        max_retries=2,
        base_delay=1.0,
    )

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Awaitable, Callable, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_RETRY_STATUS = frozenset({429, 500, 502, 503, 504})


def compute_backoff_delay(
    attempt: int,
    base_delay: float,
    max_delay: float,
    backoff_factor: float = 2.0,
) -> float:
    """Delay con jitter (hasta +20%) para el intento `attempt` (0-based), acotado por max_delay."""
    delay = min(base_delay * (backoff_factor ** attempt), max_delay)
    return delay + random.uniform(0, 0.2 * delay)


async def retry_with_backoff(
    func: Callable[..., Awaitable[httpx.Response]],
    *args,
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    backoff_factor: float = 2.0,
    retry_on_status: Optional[frozenset[int] | set[int]] = None,
    on_retry: Optional[Callable[[int, str], None]] = None,
    **kwargs,
) -> httpx.Response:
    """
    Ejecuta una función HTTP async con reintentos y backoff exponencial.

    Args:
        func: Función async a ejecutar (ej: client.get, client.post)
        max_retries: Reintentos adicionales tras el primer intento
        base_delay: Delay inicial en segundos
        max_delay: Delay máximo en segundos
        backoff_factor: Factor de multiplicación del delay
        retry_on_status: Códigos HTTP que deben reintentarse
        on_retry: Callback (intento, motivo) invocado antes de cada espera

    Returns:
        La última respuesta de httpx. Si agotó reintentos por status,
        devuelve esa respuesta sin levantar.

    Raises:
        httpx.TransportError: Si todos los intentos fallan en transporte
    """
    if max_retries < 0:
        raise ValueError(f"max_retries debe ser >= 0, recibido: {max_retries}")
    if base_delay <= 0:
        raise ValueError(f"base_delay debe ser > 0, recibido: {base_delay}")

    retry_status = DEFAULT_RETRY_STATUS if retry_on_status is None else retry_on_status

    for attempt in range(max_retries + 1):
        is_last = attempt >= max_retries
        try:
            response = await func(*args, **kwargs)
        except httpx.TransportError as e:
            if is_last:
                logger.error(f"Error de transporte tras {max_retries + 1} intentos: {e!r}")
                raise
            reason = type(e).__name__
        else:
            if response.status_code not in retry_status or is_last:
                if attempt > 0:
                    logger.info(f"Respuesta HTTP {response.status_code} tras {attempt + 1} intentos")
                return response
            reason = f"http_{response.status_code}"

        delay = compute_backoff_delay(attempt, base_delay, max_delay, backoff_factor)
        logger.warning(
            f"Falla transitoria ({reason}) en intento {attempt + 1}/{max_retries + 1}, "
            f"reintentando en {delay:.2f}s"
        )
        if on_retry is not None:
            on_retry(attempt + 1, reason)
        await asyncio.sleep(delay)

    raise RuntimeError("Reintentos agotados sin respuesta")  # pragma: no cover


__all__ = ["DEFAULT_RETRY_STATUS", "compute_backoff_delay", "retry_with_backoff"]

# Fin del archivo storefront/shared/core/http_retry_utils.py
