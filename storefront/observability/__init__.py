# -*- coding: utf-8 -*-
"""
storefront/observability/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .prom import setup_observability

__all__ = ["setup_observability"]
# Fin del archivo storefront/observability/__init__.py
