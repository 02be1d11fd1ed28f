# -*- coding: utf-8 -*-
"""
storefront/modules/payments/utils/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .amounts import amounts_match, from_minor, normalize_currency, to_minor, validate_amount
from .datetime_helpers import ensure_utc, utcnow

__all__ = [
    "amounts_match",
    "ensure_utc",
    "from_minor",
    "normalize_currency",
    "to_minor",
    "utcnow",
    "validate_amount",
]

# Fin del archivo storefront/modules/payments/utils/__init__.py
