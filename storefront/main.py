# -*- coding: utf-8 -*-
"""
storefront/main.py

Punto de entrada principal del backend Storefront.

Ajustes clave:
- Configuración vía storefront.shared.config (get_settings / get_payments_settings)
- Grafo de servicios de pagos construido una vez en el lifespan
- Errores de dominio de pagos → JSON con error_code estable
- Observabilidad Prometheus (/metrics) vía storefront.observability.prom
- Cierre ordenado del cliente HTTP del gateway en shutdown

Autor: Storefront Payments
Fecha: 02/10/2026
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que lea configuración
# Fuera de producción .env manda sobre variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV == "development")

import anyio
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.shared.config import get_payments_settings, get_settings, setup_logging
from storefront.shared.database import SessionLocal
from storefront.shared.http_utils import get_client_ip
from storefront.shared.middleware import JSONExceptionMiddleware, get_request_id
from storefront.modules.payments.bootstrap import build_payment_services
from storefront.modules.payments.errors import PaymentError
from storefront.observability import setup_observability

settings = get_settings()
setup_logging(settings.log_level, settings.log_format, service=settings.app_name, env=settings.python_env)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    payments_settings = get_payments_settings()
    app.state.payment_services = build_payment_services(payments_settings, SessionLocal)
    logger.info(
        "🟢 Storefront iniciado (env=%s, provider=%s, refunds=%s)",
        settings.python_env,
        payments_settings.payments_provider,
        payments_settings.refunds_enabled,
    )
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        with anyio.CancelScope(shield=True):
            await app.state.payment_services.aclose()
            logger.info("💳 Cliente HTTP del gateway cerrado")
        logger.info("🔴 Storefront apagado.")


openapi_tags = [
    {"name": "payments:checkout", "description": "Creación de órdenes remotas y confirmación del cliente"},
    {"name": "payments:webhooks", "description": "Notificaciones asíncronas del gateway"},
    {"name": "payments:refunds", "description": "Reembolsos totales y parciales"},
    {"name": "payments:status", "description": "Consulta de estado de pago"},
]

app = FastAPI(
    title="Storefront Payments API",
    description="Ciclo de vida de pagos y reconciliación de webhooks",
    version=settings.app_version,
    lifespan=lifespan,
    openapi_tags=openapi_tags,
)


@app.exception_handler(PaymentError)
async def payment_error_handler(request: Request, exc: PaymentError):
    """
    Traduce errores de dominio a JSON.

    El mensaje público nunca lleva el detalle interno; los eventos de
    seguridad (firma o monto inválidos) se loguean con la IP del cliente.
    """
    request_id = getattr(request.state, "request_id", None) or get_request_id(request)
    if exc.security_event:
        logger.warning(
            "payment_security_event code=%s path=%s ip=%s detail=%s request_id=%s",
            exc.error_code,
            request.url.path,
            get_client_ip(request),
            exc.detail,
            request_id,
        )
    else:
        logger.info(
            "payment_error code=%s status=%s path=%s detail=%s",
            exc.error_code,
            exc.http_status,
            request.url.path,
            exc.detail,
        )
    return JSONResponse(
        status_code=exc.http_status,
        content={
            "success": False,
            "error_code": exc.error_code,
            "message": exc.public_message,
            "request_id": request_id,
        },
    )


# Starlette ejecuta los middlewares en orden inverso al registro:
# CORS queda outermost y el manejador de 500 justo por fuera de las rutas.
app.add_middleware(JSONExceptionMiddleware)
setup_observability(app, http_metrics=settings.http_metrics_enabled)

_cors_origins = settings.get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=_cors_origins != ["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Retry-After", "X-Request-ID"],
    max_age=600,
)

from storefront.routes import router as main_router

app.include_router(main_router)


@app.get("/")
async def root():
    return {"service": settings.app_name, "status": "active"}


if __name__ == "__main__":
    uvicorn.run(
        "storefront.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.is_dev,
        log_level=settings.log_level.lower(),
    )

# Fin del archivo storefront/main.py
