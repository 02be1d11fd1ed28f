# -*- coding: utf-8 -*-
"""
storefront/shared/middleware/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .exception_handler import JSONExceptionMiddleware, get_request_id

__all__ = ["JSONExceptionMiddleware", "get_request_id"]

# Fin del archivo storefront/shared/middleware/__init__.py
