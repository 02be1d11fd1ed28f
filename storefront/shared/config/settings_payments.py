# -*- coding: utf-8 -*-
"""
storefront/shared/config/settings_payments.py

Configuración de pagos (Razorpay) para Storefront.

Descripción:
    Centraliza credenciales del gateway, política de reintentos, límites
    de monto, rate limits y feature flags de reembolsos.
    La instancia es inmutable (frozen) y se resuelve una sola vez al arrancar;
    los servicios la reciben por constructor, nunca leen os.getenv por su cuenta.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class PaymentsSettings(BaseSettings):
    """Configuración del sistema de pagos."""

    python_env: str = Field(default="development", validation_alias="PYTHON_ENV")

    # =========================================================================
    # FEATURE FLAGS
    # =========================================================================

    payments_provider: str = Field(
        default="razorpay",
        description="Etiqueta del proveedor guardada en payment_provider",
    )

    refunds_enabled: bool = Field(
        default=True,
        description="Habilita el sistema de reembolsos",
    )

    # =========================================================================
    # RAZORPAY
    # =========================================================================

    razorpay_key_id: Optional[str] = Field(
        default=None,
        description="Key ID de Razorpay (rzp_live_... o rzp_test_...)",
    )

    razorpay_key_secret: Optional[SecretStr] = Field(
        default=None,
        description="Key secret de Razorpay (firma de confirmaciones del cliente)",
    )

    razorpay_webhook_secret: Optional[SecretStr] = Field(
        default=None,
        description="Secreto compartido para firmar webhooks",
    )

    razorpay_api_base_url: str = Field(
        default="https://api.razorpay.com/v1",
        description="URL base de la API REST del gateway",
    )

    razorpay_currency: str = Field(
        default="INR",
        description="Moneda por defecto para órdenes sin currency explícita",
    )

    razorpay_receipt_prefix: str = Field(
        default="receipt_",
        description="Prefijo del receipt idempotente derivado del order_id local",
    )

    # =========================================================================
    # TIMEOUTS Y REINTENTOS
    # =========================================================================

    razorpay_timeout_ms: int = Field(
        default=30_000,
        validation_alias="RAZORPAY_TIMEOUT",
        description="Tiempo máximo total por operación con el gateway (ms)",
    )

    razorpay_max_retries: int = Field(
        default=3,
        ge=1,
        description="Número máximo de intentos por llamada (incluye el primero)",
    )

    razorpay_retry_delay_ms: int = Field(
        default=1_000,
        validation_alias="RAZORPAY_RETRY_DELAY",
        description="Delay base del backoff exponencial (ms)",
    )

    razorpay_retry_max_delay_ms: int = Field(
        default=8_000,
        validation_alias="RAZORPAY_RETRY_MAX_DELAY",
        description="Delay máximo entre intentos (ms)",
    )

    # =========================================================================
    # LÍMITES Y VALIDACIONES
    # =========================================================================

    amount_tolerance_minor: int = Field(
        default=0,
        ge=0,
        validation_alias="PAYMENTS_AMOUNT_TOLERANCE_MINOR",
        description="Tolerancia al comparar montos, en unidades menores (paise/centavos)",
    )

    # =========================================================================
    # RATE LIMITING
    # =========================================================================

    webhook_rate_limit_enabled: bool = Field(default=True, validation_alias="WEBHOOK_RATE_LIMIT_ENABLED")
    webhook_rate_limit_requests: int = Field(default=10, validation_alias="WEBHOOK_RATE_LIMIT_REQUESTS")
    webhook_rate_limit_window_seconds: int = Field(default=1, validation_alias="WEBHOOK_RATE_LIMIT_WINDOW")

    api_rate_limit_enabled: bool = Field(default=True, validation_alias="RAZORPAY_RATE_LIMIT_ENABLED")
    api_rate_limit_requests: int = Field(default=100, validation_alias="RAZORPAY_RATE_LIMIT_MAX")
    api_rate_limit_window_ms: int = Field(default=900_000, validation_alias="RAZORPAY_RATE_LIMIT_WINDOW")

    @field_validator("razorpay_currency", mode="before")
    @classmethod
    def _normalize_currency(cls, v: Optional[str]) -> str:
        return (v or "INR").strip().upper()

    # ===== Derivados =====
    @computed_field  # type: ignore[misc]
    @property
    def is_production(self) -> bool:
        return self.python_env.strip().lower() == "production"

    @property
    def timeout_seconds(self) -> float:
        return self.razorpay_timeout_ms / 1000.0

    @property
    def retry_delay_seconds(self) -> float:
        return self.razorpay_retry_delay_ms / 1000.0

    @property
    def retry_max_delay_seconds(self) -> float:
        return self.razorpay_retry_max_delay_ms / 1000.0

    @property
    def api_rate_limit_window_seconds(self) -> int:
        return max(1, self.api_rate_limit_window_ms // 1000)

    def key_secret(self) -> Optional[str]:
        return self.razorpay_key_secret.get_secret_value() if self.razorpay_key_secret else None

    def webhook_secret(self) -> Optional[str]:
        return self.razorpay_webhook_secret.get_secret_value() if self.razorpay_webhook_secret else None

    def validate_for_environment(self) -> None:
        """
        Reglas de arranque:
        - Producción: key id, key secret y webhook secret obligatorios;
          el key id debe empezar con 'rzp_'; aviso si son llaves de prueba.
        - Resto de entornos: solo avisos por variables ausentes.
        """
        missing = [
            name
            for name, value in (
                ("RAZORPAY_KEY_ID", self.razorpay_key_id),
                ("RAZORPAY_KEY_SECRET", self.key_secret()),
                ("RAZORPAY_WEBHOOK_SECRET", self.webhook_secret()),
            )
            if not value
        ]

        if self.is_production:
            if missing:
                raise ValueError(f"Faltan variables de Razorpay en producción: {', '.join(missing)}")
            if not self.razorpay_key_id.startswith("rzp_"):
                raise ValueError("RAZORPAY_KEY_ID inválido: debe comenzar con 'rzp_'")
            if "test" in self.razorpay_key_id:
                logger.warning("Usando llaves de prueba de Razorpay en entorno de producción")
            return

        if missing:
            logger.warning(f"Variables de Razorpay no configuradas ({self.python_env}): {missing}")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_payments_settings() -> PaymentsSettings:
    """
    Obtiene la instancia global (inmutable) de configuración de pagos.

    Returns:
        PaymentsSettings: Configuración de pagos validada para el entorno
    """
    settings = PaymentsSettings()
    settings.validate_for_environment()
    return settings


__all__ = [
    "PaymentsSettings",
    "get_payments_settings",
]
# Fin del archivo storefront/shared/config/settings_payments.py
