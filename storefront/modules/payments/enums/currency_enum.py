# -*- coding: utf-8 -*-
"""
storefront/modules/payments/enums/currency_enum.py

Monedas aceptadas por el gateway para cobros de la tienda.
Se persisten como código ISO de 3 letras en mayúsculas.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from enum import StrEnum


class Currency(StrEnum):
    """Moneda operativa para cobros."""

    INR = "INR"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


__all__ = ["Currency"]

# Fin del archivo storefront/modules/payments/enums/currency_enum.py
