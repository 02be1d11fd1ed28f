# -*- coding: utf-8 -*-
"""
storefront/modules/payments/routes/dependencies.py

Dependencias FastAPI que entregan los servicios construidos en el lifespan.
En tests se sobreescriben con app.dependency_overrides.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from fastapi import Depends, Request

from storefront.modules.payments.bootstrap import PaymentServices
from storefront.modules.payments.facades.payments import PaymentOrchestrator, RefundCoordinator


def get_payment_services(request: Request) -> PaymentServices:
    services = getattr(request.app.state, "payment_services", None)
    if services is None:
        raise RuntimeError("Servicios de pagos no inicializados (¿lifespan deshabilitado?)")
    return services


def get_orchestrator(services: PaymentServices = Depends(get_payment_services)) -> PaymentOrchestrator:
    return services.orchestrator


def get_refund_coordinator(services: PaymentServices = Depends(get_payment_services)) -> RefundCoordinator:
    return services.refunds


__all__ = ["get_orchestrator", "get_payment_services", "get_refund_coordinator"]

# Fin del archivo storefront/modules/payments/routes/dependencies.py
