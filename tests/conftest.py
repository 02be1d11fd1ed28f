# tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests para Storefront.

- Variables de entorno de prueba ANTES de importar la app (PYTHON_ENV=test,
  SQLite local, secretos del gateway de prueba, rate limits apagados).
- Motor SQLite async por test sobre archivo temporal, con los tipos
  exclusivos de Postgres parchados (JSONB → JSON).
- Grafo de servicios de pagos con un gateway falso.
"""

import os
import tempfile
from pathlib import Path

# -----------------------------------------------------------------------------
# 0) Entorno de pruebas (antes de cualquier import de storefront)
# -----------------------------------------------------------------------------
_TEST_DB = Path(tempfile.gettempdir()) / "storefront_app_test.db"

os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("DB_URL", f"sqlite+aiosqlite:///{_TEST_DB}")
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_suite")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "test_key_secret")
os.environ.setdefault("RAZORPAY_WEBHOOK_SECRET", "test_webhook_secret")
os.environ.setdefault("WEBHOOK_RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("RAZORPAY_RATE_LIMIT_ENABLED", "false")

import pytest
import pytest_asyncio
from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.shared.database import Base, create_engine_from_url
from storefront.modules.payments import models  # noqa: F401  registra tablas en Base.metadata
from storefront.modules.payments.facades.payments import PaymentOrchestrator, RefundCoordinator
from storefront.modules.payments.middleware import reset_rate_limiters
from storefront.modules.payments.services import OrderLedger, SignatureVerifier

from tests.factories import (
    TEST_KEY_SECRET,
    TEST_WEBHOOK_SECRET,
    FakeGateway,
    make_settings,
    seed_order as _seed_order,
)


def _patch_pg_types_for_sqlite(metadata):
    """Reemplaza tipos Postgres (JSONB) por equivalentes compatibles con SQLite."""
    for table in metadata.tables.values():
        for col in table.columns:
            if isinstance(col.type, JSONB):
                col.type = JSON()


# -----------------------------------------------------------------------------
# 1) Base de datos
# -----------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(tmp_path):
    """
    Motor ASYNC SQLite sobre archivo temporal (NullPool: una conexión por
    sesión, así dos transacciones concurrentes no comparten conexión).
    """
    eng = create_engine_from_url(f"sqlite+aiosqlite:///{tmp_path / 'payments.db'}")

    async with eng.begin() as conn:
        def _create_all(sync_conn):
            _patch_pg_types_for_sqlite(Base.metadata)
            Base.metadata.create_all(bind=sync_conn)
        await conn.run_sync(_create_all)

    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
def ledger(session_factory):
    return OrderLedger(session_factory)


@pytest.fixture
def seed_order(session_factory):
    """Factory: crea una orden pending (o en el estado indicado)."""

    async def _factory(order_id, total, currency="INR", **kwargs):
        return await _seed_order(session_factory, order_id, total, currency, **kwargs)

    return _factory


# -----------------------------------------------------------------------------
# 2) Servicios de pagos
# -----------------------------------------------------------------------------
@pytest.fixture
def payments_settings():
    return make_settings()


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def verifier():
    return SignatureVerifier(TEST_KEY_SECRET, TEST_WEBHOOK_SECRET, is_production=False)


@pytest.fixture
def refunds(ledger, fake_gateway, payments_settings):
    return RefundCoordinator(ledger, fake_gateway, payments_settings)


@pytest.fixture
def orchestrator(ledger, fake_gateway, verifier, refunds, payments_settings):
    return PaymentOrchestrator(ledger, fake_gateway, verifier, refunds, payments_settings)


@pytest.fixture(autouse=True)
def _fresh_rate_limiters():
    reset_rate_limiters()
    yield
    reset_rate_limiters()
