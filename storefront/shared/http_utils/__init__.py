# -*- coding: utf-8 -*-
"""
storefront/shared/http_utils/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .request_meta import get_client_ip, get_request_meta, get_user_agent

__all__ = ["get_client_ip", "get_request_meta", "get_user_agent"]

# Fin del archivo storefront/shared/http_utils/__init__.py
