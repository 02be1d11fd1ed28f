# -*- coding: utf-8 -*-
"""
storefront/shared/database/database.py

SQLAlchemy async sobre asyncpg (producción) o aiosqlite (pruebas locales).
NullPool en la app; cada sesión abre y cierra su conexión.

Provee:
- engine (create_async_engine)
- SessionLocal (async_sessionmaker)
- check_database_health()

Notas:
- Con asyncpg se añaden timeouts a nivel de conexión (timeout, command_timeout)
  y TLS cuando DB_SSL está activo.
- El ledger de pagos abre sus propias transacciones cortas; nunca mantiene
  una transacción abierta mientras espera al gateway.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from storefront.shared.config import get_settings
from storefront.shared.database.base import Base

logger = logging.getLogger(__name__)

settings = get_settings()


def build_ssl_context(is_dev: bool) -> ssl.SSLContext:
    """
    Crea un SSLContext para conexiones TLS a Postgres.

    En desarrollo no se verifica el certificado (útil contra proxies locales);
    en el resto de entornos la verificación es estricta.
    """
    if is_dev:
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
        return ctx

    ctx = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)
    ctx.check_hostname = True
    ctx.verify_mode = ssl.CERT_REQUIRED
    return ctx


def build_connect_args(database_url: str) -> dict[str, Any]:
    """connect_args específicos del driver; aiosqlite no acepta los de asyncpg."""
    if not database_url.startswith("postgresql+asyncpg"):
        return {}

    connect_args: dict[str, Any] = {
        "server_settings": {"search_path": "public"},
        "timeout": settings.db_connect_timeout_s,
        "command_timeout": settings.db_command_timeout_s,
    }
    if settings.db_ssl:
        connect_args["ssl"] = build_ssl_context(settings.is_dev)
    return connect_args


def create_engine_from_url(database_url: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(
        database_url,
        poolclass=NullPool,
        echo=echo,
        connect_args=build_connect_args(database_url),
    )


DATABASE_URL = settings.database_url

# La URL completa puede llevar credenciales; solo registramos el driver
logger.info(f"[DB] Engine async → {DATABASE_URL.split('://', 1)[0]} (echo={settings.db_echo_sql}, ssl={settings.db_ssl})")

engine = create_engine_from_url(DATABASE_URL, echo=settings.db_echo_sql)

# ── Session factory
SessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
)


# ── Health check
async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """
    Verifica conectividad a la base de datos.

    Args:
        timeout_s: Tiempo máximo de espera en segundos
        sql: Query SQL a ejecutar (default: "SELECT 1")

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text(sql))
        return True
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.warning(f"[DB] Health check falló: {e}")
        return False


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "create_engine_from_url",
    "check_database_health",
]
# Fin del archivo storefront/shared/database/database.py
