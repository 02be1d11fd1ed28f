# -*- coding: utf-8 -*-
"""
storefront/shared/core/__init__.py

Utilidades transversales de infraestructura HTTP.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .http_retry_utils import DEFAULT_RETRY_STATUS, compute_backoff_delay, retry_with_backoff

__all__ = ["DEFAULT_RETRY_STATUS", "compute_backoff_delay", "retry_with_backoff"]

# Fin del archivo storefront/shared/core/__init__.py
