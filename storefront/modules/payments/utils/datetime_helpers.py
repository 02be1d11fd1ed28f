# -*- coding: utf-8 -*-
"""
storefront/modules/payments/utils/datetime_helpers.py

Utilidades para manejo consistente de timestamps UTC.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """
    Retorna el timestamp UTC actual (timezone-aware).

    Examples:
        >>> utcnow().tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Asume UTC para datetimes naive (SQLite los devuelve así)."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


__all__ = ["utcnow", "ensure_utc"]

# Fin del archivo storefront/modules/payments/utils/datetime_helpers.py
