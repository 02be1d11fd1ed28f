# -*- coding: utf-8 -*-
"""
storefront/modules/payments/errors.py

Taxonomía de errores del motor de pagos.

Cada excepción conoce su status HTTP, un error_code estable para clientes
y un mensaje público. Los errores de seguridad (firma, monto) comparten el
mismo mensaje público para no servir de oráculo; el detalle va al log.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from typing import Optional

SECURITY_PUBLIC_MESSAGE = "Payment verification failed"


class PaymentError(Exception):
    """Base de los errores de dominio de pagos."""

    http_status: int = 400
    error_code: str = "payment_error"
    public_message: str = "Payment request could not be processed"
    security_event: bool = False

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.public_message
        super().__init__(self.detail)


class GatewayUnavailable(PaymentError):
    """Falla transitoria (red, timeout, 5xx); ya se reintentó dentro del cliente."""

    http_status = 503
    error_code = "gateway_unavailable"
    public_message = "Payment provider temporarily unavailable"


class GatewayRejected(PaymentError):
    """El gateway rechazó la petición por validación (4xx); no se reintenta."""

    http_status = 422
    error_code = "gateway_rejected"
    public_message = "Payment provider rejected the request"

    def __init__(self, detail: Optional[str] = None, *, status_code: Optional[int] = None):
        super().__init__(detail)
        self.status_code = status_code


class GatewayNotFound(PaymentError):
    http_status = 404
    error_code = "gateway_not_found"
    public_message = "Payment not found at provider"


class SignatureInvalid(PaymentError):
    http_status = 400
    error_code = "verification_failed"
    public_message = SECURITY_PUBLIC_MESSAGE
    security_event = True


class AmountMismatch(PaymentError):
    http_status = 400
    error_code = "verification_failed"
    public_message = SECURITY_PUBLIC_MESSAGE
    security_event = True


class InvalidAmount(PaymentError):
    """Monto fuera de los límites de la moneda o con más decimales de los permitidos."""

    http_status = 400
    error_code = "invalid_amount"
    public_message = "Invalid amount"


class InvalidRefundAmount(PaymentError):
    http_status = 400
    error_code = "invalid_refund_amount"
    public_message = "Invalid refund amount"


class PaymentNotCaptured(PaymentError):
    """El gateway todavía no muestra el pago como capturado; el cliente puede reintentar."""

    http_status = 409
    error_code = "payment_not_captured"
    public_message = "Payment not captured yet"


class InvalidTransition(PaymentError):
    http_status = 409
    error_code = "invalid_transition"
    public_message = "Payment is not in a valid state for this operation"


class OrderNotFound(PaymentError):
    http_status = 404
    error_code = "order_not_found"
    public_message = "Order not found"


class PaymentNotFound(PaymentError):
    http_status = 404
    error_code = "payment_not_found"
    public_message = "Payment not found"


class RefundsDisabled(PaymentError):
    http_status = 403
    error_code = "refunds_disabled"
    public_message = "Refunds are disabled"


__all__ = [
    "SECURITY_PUBLIC_MESSAGE",
    "PaymentError",
    "GatewayUnavailable",
    "GatewayRejected",
    "GatewayNotFound",
    "SignatureInvalid",
    "AmountMismatch",
    "InvalidAmount",
    "InvalidRefundAmount",
    "PaymentNotCaptured",
    "InvalidTransition",
    "OrderNotFound",
    "PaymentNotFound",
    "RefundsDisabled",
]

# Fin del archivo storefront/modules/payments/errors.py
