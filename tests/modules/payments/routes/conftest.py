# tests/modules/payments/routes/conftest.py
# -*- coding: utf-8 -*-
"""
Cliente HTTP contra la app real con los servicios de pagos de la suite
(SQLite temporal + gateway falso) inyectados vía dependency_overrides.
"""
import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from storefront.modules.payments.bootstrap import PaymentServices
from storefront.modules.payments.routes.dependencies import get_payment_services


@pytest.fixture
def app():
    from storefront.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
def services(payments_settings, ledger, fake_gateway, verifier, refunds, orchestrator):
    return PaymentServices(
        settings=payments_settings,
        ledger=ledger,
        gateway=fake_gateway,
        verifier=verifier,
        refunds=refunds,
        orchestrator=orchestrator,
    )


@pytest_asyncio.fixture
async def client(app, services):
    app.dependency_overrides[get_payment_services] = lambda: services
    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://testserver") as c:
                yield c
    finally:
        app.dependency_overrides.clear()
