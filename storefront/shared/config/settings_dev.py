# -*- coding: utf-8 -*-
"""
storefront/shared/config/settings_dev.py

Overrides para entorno de DESARROLLO usando Pydantic v2.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from typing import Literal

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class DevSettings(BaseAppSettings):
    """Configuración para entorno de desarrollo."""

    python_env: Literal["development", "test", "production"] = "development"

    # Logging legible en consola
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"
    log_format: Literal["json", "pretty", "plain"] = "plain"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["DevSettings"]

# Fin del archivo storefront/shared/config/settings_dev.py
