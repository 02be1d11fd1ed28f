# -*- coding: utf-8 -*-
"""
storefront/modules/payments/__init__.py

Motor de ciclo de vida de pagos y reconciliación de webhooks.

Autor: Storefront Payments
Fecha: 02/10/2026
"""
# Fin del archivo storefront/modules/payments/__init__.py
