# -*- coding: utf-8 -*-
"""
storefront/modules/payments/services/webhooks/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from .signature_verification import SignatureVerifier, compute_signature

__all__ = ["SignatureVerifier", "compute_signature"]

# Fin del archivo storefront/modules/payments/services/webhooks/__init__.py
