# -*- coding: utf-8 -*-
"""
storefront/modules/payments/models/webhook_event_models.py

Registro de webhooks verificados. event_id único permite detectar replays
del mismo evento antes de despachar.

Autor: Storefront Payments
Fecha: 02/10/2026
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from storefront.shared.database.base import Base
from storefront.modules.payments.utils.datetime_helpers import utcnow


class WebhookEvent(Base):
    __tablename__ = "webhook_events"

    id: Mapped[int] = mapped_column(primary_key=True)

    event_id: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        unique=True,
        doc="X-Razorpay-Event-Id, o sha256 del body crudo si el header no viene.",
    )

    event_type: Mapped[str] = mapped_column(String(64), nullable=False)

    entity_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)

    payload: Mapped[Optional[dict]] = mapped_column(JSONB, nullable=True)

    signature_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    processed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    outcome: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    received_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    processed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<WebhookEvent event_id={self.event_id} type={self.event_type} processed={self.processed}>"


__all__ = ["WebhookEvent"]

# Fin del archivo storefront/modules/payments/models/webhook_event_models.py
