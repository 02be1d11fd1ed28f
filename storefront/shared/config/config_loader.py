# -*- coding: utf-8 -*-
"""
storefront/shared/config/config_loader.py

Selecciona la clase de settings según PYTHON_ENV, ejecuta las validaciones
de arranque y cachea la instancia.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

import os
from functools import lru_cache
from typing import Type

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_prod import ProdSettings
from .settings_testing import EnvTestingSettings

_SETTINGS_BY_ENV: dict[str, Type[BaseAppSettings]] = {
    "production": ProdSettings,
    "test": EnvTestingSettings,
    "development": DevSettings,
}


def resolve_settings_class(env: str) -> Type[BaseAppSettings]:
    cls = _SETTINGS_BY_ENV.get(env.strip().strip('"').strip("'").lower())
    if cls is None:
        raise ValueError(f"PYTHON_ENV={env!r} no reconocido (development, test, production)")
    return cls


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Devuelve la configuración del entorno actual (singleton).

    Raises:
        ValueError: Si PYTHON_ENV no es válido o fallan las validaciones de seguridad
    """
    settings = resolve_settings_class(os.getenv("PYTHON_ENV", "development"))()
    settings._security_checks()
    return settings


__all__ = ["get_settings", "resolve_settings_class"]
# Fin del archivo storefront/shared/config/config_loader.py
