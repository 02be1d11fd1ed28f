# -*- coding: utf-8 -*-
"""
storefront/routes/health_routes.py

Endpoint básico de health check del backend Storefront.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from storefront.shared.config import get_settings
from storefront.shared.database import check_database_health

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Health check del backend",
    description="Estado básico del servicio y conectividad a la base de datos.",
)
async def health_check() -> dict:
    settings = get_settings()

    db_ok = await check_database_health(timeout_s=2.0)

    return {
        "status": "ok" if db_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.python_env,
        "database": {
            "reachable": db_ok,
        },
        "service": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
    }


__all__ = ["router"]

# Fin del archivo storefront/routes/health_routes.py
