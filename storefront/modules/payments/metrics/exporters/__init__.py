# -*- coding: utf-8 -*-
"""
storefront/modules/payments/metrics/exporters/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from . import prometheus_exporter

__all__ = ["prometheus_exporter"]

# Fin del archivo storefront/modules/payments/metrics/exporters/__init__.py
