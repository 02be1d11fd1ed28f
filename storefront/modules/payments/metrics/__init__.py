# -*- coding: utf-8 -*-
"""
storefront/modules/payments/metrics/__init__.py

Métricas Prometheus del motor de pagos.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .exporters import prometheus_exporter as payment_metrics

__all__ = ["payment_metrics"]

# Fin del archivo storefront/modules/payments/metrics/__init__.py
