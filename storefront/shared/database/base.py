# -*- coding: utf-8 -*-
"""
storefront/shared/database/base.py

Base declarativa y convención de nombres para modelos ORM.

Este módulo proporciona:
- Base: clase base declarativa de SQLAlchemy
- NAMING_CONVENTION: convención de nombres para constraints
- as_pg_enum: helper genérico para mapear enums Python a ENUM de PostgreSQL

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from enum import Enum
from typing import Type

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM

# ===== NAMING CONVENTION =====
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """
    Base declarativa para todos los modelos ORM de Storefront.
    Incluye convención de nombres para constraints.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def as_pg_enum(
    enum_cls: Type[Enum],
    name: str | None = None,
    schema: str | None = None,
) -> PG_ENUM:
    """
    Devuelve un tipo ENUM de PostgreSQL basado en un Enum de Python.

    Uso típico:

        class PaymentRecord(Base):
            payment_status: Mapped[PaymentStatus] = mapped_column(
                PaymentStatus.as_pg_enum(),
                nullable=False,
            )

    - Persiste los .value del enum (no los nombres).
    - Si no se pasa `name`, usa `__pg_enum_name__` del enum
      o el nombre de la clase en minúsculas.
    """
    enum_name = name or getattr(enum_cls, "__pg_enum_name__", enum_cls.__name__.lower())

    def _values(_: object) -> list[str]:
        return [e.value for e in enum_cls]  # type: ignore[arg-type]

    return PG_ENUM(
        enum_cls,
        name=enum_name,
        schema=schema,
        values_callable=_values,
    )


__all__ = ["Base", "NAMING_CONVENTION", "as_pg_enum"]

# Fin del archivo storefront/shared/database/base.py
