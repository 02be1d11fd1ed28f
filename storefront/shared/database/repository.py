# -*- coding: utf-8 -*-
"""
storefront/shared/database/repository.py

Repositorio base para operaciones async con SQLAlchemy.

Los repositorios nunca abren ni confirman transacciones: reciben la sesión
del llamador (OrderLedger) y solo hacen flush.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")  # modelo ORM


class BaseRepository(Generic[T]):
    """Lecturas por PK o criterio y alta con flush; sin borrado (el ledger es append/update)."""

    def __init__(self, model: Type[T]):
        self.model = model

    async def get(self, session: AsyncSession, obj_id: Any) -> Optional[T]:
        return await session.get(self.model, obj_id, populate_existing=True)

    async def first_by(self, session: AsyncSession, *criteria: ColumnElement[bool]) -> Optional[T]:
        # populate_existing: otra transacción pudo cambiar la fila ya cargada en esta sesión
        stmt = select(self.model).where(*criteria).execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def create(self, session: AsyncSession, **fields: Any) -> T:
        obj = self.model(**fields)
        session.add(obj)
        await session.flush()
        return obj


__all__ = ["BaseRepository"]

# Fin del archivo storefront/shared/database/repository.py
