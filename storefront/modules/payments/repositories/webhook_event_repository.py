# -*- coding: utf-8 -*-
"""
storefront/modules/payments/repositories/webhook_event_repository.py

Repositorio para la tabla webhook_events.

Responsabilidades:
- Idempotencia de webhooks (event_id)
- Marcado de procesado con su resultado

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from typing import Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.shared.database.repository import BaseRepository
from storefront.modules.payments.models import WebhookEvent
from storefront.modules.payments.utils.datetime_helpers import utcnow


class WebhookEventRepository(BaseRepository[WebhookEvent]):
    def __init__(self) -> None:
        super().__init__(WebhookEvent)

    async def get_by_event_id(self, session: AsyncSession, event_id: str) -> Optional[WebhookEvent]:
        return await self.first_by(session, WebhookEvent.event_id == event_id)

    async def mark_processed(self, session: AsyncSession, event_id: str, outcome: str) -> int:
        stmt = (
            update(WebhookEvent)
            .where(WebhookEvent.event_id == event_id)
            .values(processed=True, outcome=outcome, processed_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

# Fin del archivo storefront/modules/payments/repositories/webhook_event_repository.py
