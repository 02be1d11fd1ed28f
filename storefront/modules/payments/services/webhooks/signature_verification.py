# -*- coding: utf-8 -*-
"""
storefront/modules/payments/services/webhooks/signature_verification.py

Verificación HMAC-SHA256 de firmas del gateway.

- Confirmación del cliente: HMAC(key_secret, "{order_id}|{payment_id}").
- Webhook: HMAC(webhook_secret, body crudo). Solo se aceptan bytes; un
  body re-serializado no coincide byte a byte con lo firmado.

Nunca lanza: cualquier entrada mal formada es False. Sin secreto
configurado, fuera de producción se acepta con un warning y en
producción se rechaza.

Autor: Storefront Payments
Fecha: 02/10/2026
"""
from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Optional

from storefront.shared.config.settings_payments import PaymentsSettings

logger = logging.getLogger(__name__)


def compute_signature(secret: str, message: bytes) -> str:
    """HMAC-SHA256 en hex (formato de las firmas del gateway)."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class SignatureVerifier:
    def __init__(
        self,
        api_secret: Optional[str],
        webhook_secret: Optional[str],
        *,
        is_production: bool,
    ) -> None:
        self._api_secret = api_secret or None
        self._webhook_secret = webhook_secret or None
        self._is_production = is_production

    @classmethod
    def from_settings(cls, settings: PaymentsSettings) -> "SignatureVerifier":
        return cls(
            settings.key_secret(),
            settings.webhook_secret(),
            is_production=settings.is_production,
        )

    def _missing_secret(self, kind: str) -> bool:
        if self._is_production:
            logger.error(f"Firma {kind} rechazada: secreto no configurado en producción")
            return False
        logger.warning(f"Firma {kind} NO verificada: secreto no configurado (entorno no productivo)")
        return True

    @staticmethod
    def _matches(expected: str, provided: str) -> bool:
        try:
            candidate = provided.strip().encode("utf-8")
        except UnicodeEncodeError:
            logger.warning("Firma rechazada: contiene caracteres no codificables")
            return False
        return hmac.compare_digest(expected.encode("utf-8"), candidate)

    def verify_client_confirmation(
        self,
        remote_order_id: object,
        remote_payment_id: object,
        signature: object,
    ) -> bool:
        if not self._api_secret:
            return self._missing_secret("client_confirmation")

        if not all(isinstance(v, str) and v for v in (remote_order_id, remote_payment_id, signature)):
            logger.warning("Confirmación de pago rechazada: campos de firma ausentes o inválidos")
            return False

        try:
            message = f"{remote_order_id}|{remote_payment_id}".encode("utf-8")
        except UnicodeEncodeError:
            logger.warning("Confirmación de pago rechazada: identificadores no codificables")
            return False
        expected = compute_signature(self._api_secret, message)
        return self._matches(expected, signature)

    def verify_webhook(self, raw_body: object, signature_header: object) -> bool:
        if not isinstance(raw_body, (bytes, bytearray)):
            logger.error(
                f"verify_webhook requiere el body crudo en bytes; recibido {type(raw_body).__name__}"
            )
            return False

        if not self._webhook_secret:
            return self._missing_secret("webhook")

        if not isinstance(signature_header, str) or not signature_header.strip():
            logger.warning("Webhook rechazado: falta header de firma")
            return False

        expected = compute_signature(self._webhook_secret, bytes(raw_body))
        return self._matches(expected, signature_header)


__all__ = ["SignatureVerifier", "compute_signature"]

# Fin del archivo storefront/modules/payments/services/webhooks/signature_verification.py
