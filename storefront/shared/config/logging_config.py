# -*- coding: utf-8 -*-
"""
storefront/shared/config/logging_config.py

Configuración centralizada de logging para Storefront.

- plain/pretty: una línea legible por registro (desarrollo y pruebas)
- json: python-json-logger con campos fijos de servicio y entorno, para que
  los eventos de seguridad de pagos se puedan filtrar en el agregador

Autor: Storefront Payments
Fecha: 02/10/2026
"""

import logging.config
from typing import Any, Literal, Optional

# Librerías ruidosas que no deben heredar DEBUG del root
_QUIET_LOGGERS = ("sqlalchemy.pool", "sqlalchemy.engine", "aiosqlite", "asyncpg", "httpx", "httpcore")


def build_logging_config(
    level: str,
    fmt: str,
    static_fields: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Arma el dict para logging.config.dictConfig."""
    use_json = fmt == "json"

    formatter: dict[str, Any]
    if use_json:
        formatter = {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            "rename_fields": {"levelname": "level", "asctime": "timestamp"},
            "static_fields": dict(static_fields or {}),
        }
    else:
        formatter = {
            "format": "%(asctime)s %(levelname)s [%(name)s]: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": formatter},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"handlers": ["console"], "level": level.upper()},
        "loggers": {name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
    }


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain",
    **static_fields: Any,
) -> None:
    """
    Configura el logging raíz de la aplicación.

    Ejemplos:
        >>> setup_logging("INFO", "plain")
        >>> setup_logging("WARNING", "json", service="storefront", env="production")
    """
    logging.config.dictConfig(build_logging_config(level, fmt, static_fields))


__all__ = ["build_logging_config", "setup_logging"]
# Fin del archivo storefront/shared/config/logging_config.py
