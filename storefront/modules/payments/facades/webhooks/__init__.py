# -*- coding: utf-8 -*-
"""
storefront/modules/payments/facades/webhooks/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .webhook_handler import WebhookSignatureError, compute_event_id, extract_signature, handle_webhook

__all__ = ["WebhookSignatureError", "compute_event_id", "extract_signature", "handle_webhook"]

# Fin del archivo storefront/modules/payments/facades/webhooks/__init__.py
