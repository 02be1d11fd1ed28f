# -*- coding: utf-8 -*-
"""
storefront/modules/payments/facades/__init__.py

Fachadas del motor de pagos: orquestador, reembolsos y entrada de webhooks.

Autor: Storefront Payments
Fecha: 02/10/2026
"""
# Fin del archivo storefront/modules/payments/facades/__init__.py
