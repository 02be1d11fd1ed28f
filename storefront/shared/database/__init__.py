# -*- coding: utf-8 -*-
"""
storefront/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from .database import (
    engine,
    SessionLocal,
    create_engine_from_url,
    check_database_health,
)
from .base import Base, NAMING_CONVENTION, as_pg_enum
from .repository import BaseRepository

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "NAMING_CONVENTION",
    "as_pg_enum",
    "BaseRepository",
    "create_engine_from_url",
    "check_database_health",
]

# Fin del archivo storefront/shared/database/__init__.py
