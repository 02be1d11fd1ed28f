# -*- coding: utf-8 -*-
"""
storefront/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS usando Pydantic v2.
Determinista: logging moderado y base SQLite local salvo que DB_URL diga otra cosa.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    python_env: Literal["development", "test", "production"] = "test"

    # Menos ruido en la suite
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_format: Literal["json", "pretty", "plain"] = "pretty"

    db_url: Optional[str] = Field(
        default="sqlite+aiosqlite:///./storefront_test.db",
        validation_alias="DB_URL",
    )

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]
# Fin del archivo storefront/shared/config/settings_testing.py
