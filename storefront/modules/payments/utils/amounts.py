# -*- coding: utf-8 -*-
"""
storefront/modules/payments/utils/amounts.py

Validación y conversión de montos.

Los montos locales son Decimal con 2 decimales; el gateway trabaja en
unidades menores enteras (paise, centavos). Toda comparación de montos
se hace en unidades menores, con una tolerancia configurable.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from storefront.modules.payments.enums.currency_enum import Currency
from storefront.modules.payments.errors import InvalidAmount

AmountLike = Union[Decimal, int, float, str]

MINOR_UNITS_PER_MAJOR = 100
TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class CurrencyLimits:
    min_amount: Decimal
    max_amount: Decimal


CURRENCY_LIMITS: dict[str, CurrencyLimits] = {
    Currency.INR: CurrencyLimits(Decimal("0.50"), Decimal("100000000")),
    Currency.USD: CurrencyLimits(Decimal("0.01"), Decimal("1000000")),
    Currency.EUR: CurrencyLimits(Decimal("0.01"), Decimal("1000000")),
    Currency.GBP: CurrencyLimits(Decimal("0.01"), Decimal("1000000")),
}


def to_decimal(value: AmountLike) -> Decimal:
    """Convierte a Decimal; los float pasan por str para no arrastrar error binario."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmount(f"Monto no numérico: {value!r}") from e


def to_minor(value: AmountLike) -> int:
    """
    Convierte un monto mayor a unidades menores con redondeo half-up.

    Examples:
        >>> to_minor(Decimal("500.00"))
        50000
        >>> to_minor("10.005")
        1001
    """
    amount = to_decimal(value) * MINOR_UNITS_PER_MAJOR
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor(value: int) -> Decimal:
    """
    Examples:
        >>> from_minor(90000)
        Decimal('900.00')
    """
    return (Decimal(int(value)) / MINOR_UNITS_PER_MAJOR).quantize(TWO_PLACES)


def normalize_currency(currency: str | None, default: str) -> str:
    return (currency or default).strip().upper()


def validate_amount(value: AmountLike, currency: str) -> Decimal:
    """
    Valida límites por moneda y máximo dos decimales.

    Returns:
        El monto normalizado a 2 decimales.

    Raises:
        InvalidAmount: moneda no soportada, decimales de más o fuera de rango
    """
    limits = CURRENCY_LIMITS.get(currency.upper())
    if limits is None:
        raise InvalidAmount(f"Moneda no soportada: {currency}")

    amount = to_decimal(value)
    if not amount.is_finite():
        raise InvalidAmount("Monto no finito")
    if amount != amount.quantize(TWO_PLACES):
        raise InvalidAmount(f"Monto con más de 2 decimales: {amount}")
    if amount < limits.min_amount:
        raise InvalidAmount(f"Monto menor al mínimo de {currency}: {amount} < {limits.min_amount}")
    if amount > limits.max_amount:
        raise InvalidAmount(f"Monto mayor al máximo de {currency}: {amount} > {limits.max_amount}")

    return amount.quantize(TWO_PLACES)


def amounts_match(expected_minor: int, actual_minor: int, tolerance_minor: int = 0) -> bool:
    """True si la diferencia absoluta no supera la tolerancia (en unidades menores)."""
    return abs(int(expected_minor) - int(actual_minor)) <= tolerance_minor


__all__ = [
    "CURRENCY_LIMITS",
    "CurrencyLimits",
    "amounts_match",
    "from_minor",
    "normalize_currency",
    "to_decimal",
    "to_minor",
    "validate_amount",
]

# Fin del archivo storefront/modules/payments/utils/amounts.py
