# -*- coding: utf-8 -*-
"""
storefront/shared/http_utils/request_meta.py

Helpers para extraer metadatos de request (IP, User-Agent) de manera segura
detrás de proxies.

Se usa en los logs de seguridad (firmas inválidas, montos que no cuadran)
y como llave de los rate limiters.

Autor: Storefront Payments
Fecha: 02/10/2026
"""
from __future__ import annotations

from typing import Optional

from starlette.requests import Request

from storefront.shared.config import get_settings


def _trust_proxy_headers() -> bool:
    """
    Indica si debemos confiar en X-Forwarded-For / X-Real-IP.

    Default: false. Detrás de un balanceador configurar TRUST_PROXY_HEADERS=true.
    """
    return get_settings().trust_proxy_headers


def get_client_ip(request: Request) -> str:
    """
    Extrae la IP real del cliente.

    Si TRUST_PROXY_HEADERS=true:
        1. X-Forwarded-For (primer IP, cliente original)
        2. X-Real-IP
        3. request.client.host (fallback)

    Si no, solo usa request.client.host.

    Returns:
        IP del cliente como string, o "unknown" si no se puede determinar
    """
    if _trust_proxy_headers():
        xff = request.headers.get("x-forwarded-for")
        if xff:
            return xff.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


def get_user_agent(request: Request) -> Optional[str]:
    ua = request.headers.get("user-agent")
    return ua.strip() if ua else None


def get_request_meta(request: Request) -> dict:
    """Metadatos de request para auditoría: ip_address y user_agent."""
    return {
        "ip_address": get_client_ip(request),
        "user_agent": get_user_agent(request),
    }


__all__ = [
    "get_client_ip",
    "get_user_agent",
    "get_request_meta",
]
# Fin del archivo storefront/shared/http_utils/request_meta.py
