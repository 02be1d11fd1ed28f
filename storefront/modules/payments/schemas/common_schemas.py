# -*- coding: utf-8 -*-
"""
storefront/modules/payments/schemas/common_schemas.py

Tipos compartidos por los esquemas de la API de pagos.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, Field, PlainSerializer

# Decimal internamente; número JSON en la respuesta
MoneyAmount = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]


class ErrorResponse(BaseModel):
    """Cuerpo de error de dominio; el mensaje nunca incluye detalle interno."""

    success: bool = False
    error_code: str
    message: str
    request_id: Optional[str] = Field(default=None)


__all__ = ["ErrorResponse", "MoneyAmount"]

# Fin del archivo storefront/modules/payments/schemas/common_schemas.py
