# -*- coding: utf-8 -*-
"""
OrderLedger: transacciones obligatorias, validación de transiciones,
compare-and-set y bitácora de transiciones.
"""
from decimal import Decimal

import pytest

from storefront.modules.payments.enums import OrderStatus, PaymentStatus, TransitionSource
from storefront.modules.payments.errors import InvalidTransition
from storefront.modules.payments.models import PaymentRecord


def _created_fields(remote_order_id="order_rzp_1", amount="500.00"):
    return {
        "payment_order_id": remote_order_id,
        "payment_status": PaymentStatus.CREATED,
        "amount": Decimal(amount),
        "currency": "INR",
    }


@pytest.mark.asyncio
async def test_writes_require_open_transaction(ledger, seed_order, session_factory):
    await seed_order(1, "500.00")
    async with session_factory() as session:
        with pytest.raises(RuntimeError):
            await ledger.upsert_payment_record(1, _created_fields(), session, source=TransitionSource.CHECKOUT)
        with pytest.raises(RuntimeError):
            await ledger.set_order_status(1, OrderStatus.PAID, session)


@pytest.mark.asyncio
async def test_insert_then_transition_records_history(ledger, seed_order):
    await seed_order(1, "500.00")

    async with ledger.transaction() as session:
        record = await ledger.upsert_payment_record(1, _created_fields(), session, source=TransitionSource.CHECKOUT)
        assert record.payment_status == PaymentStatus.CREATED

    async with ledger.transaction() as session:
        record = await ledger.upsert_payment_record(
            1,
            {"payment_status": PaymentStatus.CAPTURED, "payment_id": "pay_1"},
            session,
            source=TransitionSource.WEBHOOK,
        )
        assert record.payment_status == PaymentStatus.CAPTURED
        assert record.payment_id == "pay_1"

    history = await ledger.list_transitions(1)
    assert [(t.from_status, t.to_status, t.source) for t in history] == [
        (None, "created", "checkout"),
        ("created", "captured", "webhook"),
    ]
    assert (await ledger.get_order(1)).order_status == OrderStatus.PAID


@pytest.mark.asyncio
async def test_invalid_transition_is_rejected_and_rolled_back(ledger, seed_order):
    await seed_order(1, "500.00")
    async with ledger.transaction() as session:
        await ledger.upsert_payment_record(1, _created_fields(), session, source=TransitionSource.CHECKOUT)

    with pytest.raises(InvalidTransition):
        async with ledger.transaction() as session:
            await ledger.upsert_payment_record(
                1,
                {"payment_status": PaymentStatus.REFUNDED},
                session,
                source=TransitionSource.REFUND_API,
            )

    record = await ledger.get_payment_record(1)
    assert record.payment_status == PaymentStatus.CREATED
    assert len(await ledger.list_transitions(1)) == 1


@pytest.mark.asyncio
async def test_insert_requires_created_status(ledger, seed_order):
    await seed_order(1, "500.00")
    with pytest.raises(InvalidTransition):
        async with ledger.transaction() as session:
            await ledger.upsert_payment_record(
                1,
                {**_created_fields(), "payment_status": PaymentStatus.CAPTURED},
                session,
                source=TransitionSource.WEBHOOK,
            )
    assert await ledger.get_payment_record(1) is None


@pytest.mark.asyncio
async def test_same_state_update_is_not_a_silent_overwrite(ledger, seed_order):
    await seed_order(1, "500.00")
    async with ledger.transaction() as session:
        await ledger.upsert_payment_record(1, _created_fields(), session, source=TransitionSource.CHECKOUT)
    async with ledger.transaction() as session:
        await ledger.upsert_payment_record(
            1,
            {"payment_status": PaymentStatus.CAPTURED, "payment_id": "pay_1"},
            session,
            source=TransitionSource.WEBHOOK,
        )

    with pytest.raises(InvalidTransition):
        async with ledger.transaction() as session:
            await ledger.upsert_payment_record(
                1,
                {"payment_status": PaymentStatus.CAPTURED, "payment_id": "pay_other"},
                session,
                source=TransitionSource.WEBHOOK,
            )

    record = await ledger.get_payment_record(1)
    assert record.payment_id == "pay_1"


@pytest.mark.asyncio
async def test_compare_and_set_loses_when_state_moved(ledger, seed_order):
    await seed_order(1, "500.00")
    async with ledger.transaction() as session:
        await ledger.upsert_payment_record(1, _created_fields(), session, source=TransitionSource.CHECKOUT)

    async with ledger.transaction() as session:
        # Otra transacción "leyó" AWAITING_CONFIRMATION; el registro sigue en CREATED
        result = await ledger.upsert_payment_record(
            1,
            {"payment_status": PaymentStatus.CAPTURED, "payment_id": "pay_1"},
            session,
            source=TransitionSource.WEBHOOK,
            conditions=(PaymentRecord.payment_status == PaymentStatus.AWAITING_CONFIRMATION,),
        )
    assert result is None

    record = await ledger.get_payment_record(1)
    assert record.payment_status == PaymentStatus.CREATED
    assert record.payment_id is None


@pytest.mark.asyncio
async def test_set_order_status_and_lookups(ledger, seed_order):
    await seed_order(1, "500.00")
    async with ledger.transaction() as session:
        await ledger.upsert_payment_record(1, _created_fields("order_rzp_77"), session, source=TransitionSource.CHECKOUT)
        await ledger.set_order_status(1, OrderStatus.AWAITING_PAYMENT, session)

    order = await ledger.get_order(1)
    assert order.order_status == OrderStatus.AWAITING_PAYMENT
    by_remote = await ledger.get_payment_record_by_remote_order_id("order_rzp_77")
    assert by_remote.order_id == 1
    assert await ledger.get_payment_record_by_payment_id("pay_missing") is None


@pytest.mark.asyncio
async def test_set_order_status_on_missing_order_fails(ledger):
    with pytest.raises(RuntimeError):
        async with ledger.transaction() as session:
            await ledger.set_order_status(999, OrderStatus.PAID, session)


@pytest.mark.asyncio
async def test_order_status_follows_payment_status(ledger, seed_order):
    await seed_order(1, "500.00")
    async with ledger.transaction() as session:
        await ledger.upsert_payment_record(1, _created_fields(), session, source=TransitionSource.CHECKOUT)
    assert (await ledger.get_order(1)).order_status == OrderStatus.AWAITING_PAYMENT

    async with ledger.transaction() as session:
        await ledger.upsert_payment_record(
            1,
            {"payment_status": PaymentStatus.FAILED, "failure_reason": "card_declined"},
            session,
            source=TransitionSource.WEBHOOK,
        )
    assert (await ledger.get_order(1)).order_status == OrderStatus.PAYMENT_FAILED

    # Sin cambio de payment_status la orden no se toca
    async with ledger.transaction() as session:
        await ledger.upsert_payment_record(1, {"failure_reason": "otro"}, session, source=TransitionSource.WEBHOOK)
    assert (await ledger.get_order(1)).order_status == OrderStatus.PAYMENT_FAILED
# Fin del archivo
