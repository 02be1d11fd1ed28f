# -*- coding: utf-8 -*-
"""
storefront/routes/__init__.py

Router maestro: health + módulo de pagos.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from fastapi import APIRouter

from storefront.modules.payments.routes import router as payments_router

from .health_routes import router as health_router

router = APIRouter()

router.include_router(health_router)
router.include_router(payments_router)

__all__ = ["router"]

# Fin del archivo storefront/routes/__init__.py
