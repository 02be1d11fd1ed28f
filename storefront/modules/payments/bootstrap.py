# -*- coding: utf-8 -*-
"""
storefront/modules/payments/bootstrap.py

Construcción explícita del grafo de servicios de pagos.

Se invoca una vez en el lifespan con la configuración ya resuelta; no hay
singletons de cliente del gateway ni lecturas de entorno en la lógica de
transiciones.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.shared.config.settings_payments import PaymentsSettings
from storefront.modules.payments.facades.payments import PaymentOrchestrator, RefundCoordinator
from storefront.modules.payments.services import GatewayClient, OrderLedger, SignatureVerifier


@dataclass(frozen=True)
class PaymentServices:
    settings: PaymentsSettings
    ledger: OrderLedger
    gateway: GatewayClient
    verifier: SignatureVerifier
    refunds: RefundCoordinator
    orchestrator: PaymentOrchestrator

    async def aclose(self) -> None:
        await self.gateway.aclose()


def build_payment_services(
    settings: PaymentsSettings,
    session_factory: async_sessionmaker[AsyncSession],
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> PaymentServices:
    ledger = OrderLedger(session_factory)
    gateway = GatewayClient(settings, transport=transport)
    verifier = SignatureVerifier.from_settings(settings)
    refunds = RefundCoordinator(ledger, gateway, settings)
    orchestrator = PaymentOrchestrator(ledger, gateway, verifier, refunds, settings)
    return PaymentServices(
        settings=settings,
        ledger=ledger,
        gateway=gateway,
        verifier=verifier,
        refunds=refunds,
        orchestrator=orchestrator,
    )


__all__ = ["PaymentServices", "build_payment_services"]

# Fin del archivo storefront/modules/payments/bootstrap.py
