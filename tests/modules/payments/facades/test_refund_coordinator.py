# -*- coding: utf-8 -*-
"""
RefundCoordinator: reembolsos totales y parciales, validación de montos,
fallas del gateway y reconciliación idempotente de refund.processed.
"""
from decimal import Decimal

import pytest

from storefront.modules.payments.enums import OrderStatus, PaymentStatus, RefundType
from storefront.modules.payments.errors import (
    GatewayRejected,
    InvalidRefundAmount,
    InvalidTransition,
    PaymentNotFound,
    RefundsDisabled,
)
from storefront.modules.payments.facades.payments import RefundCoordinator, refund_idempotency_key

from tests.factories import checkout_and_capture, make_settings, refund_event


@pytest.mark.asyncio
async def test_order_44_full_refund_then_second_refund_rejected(
    orchestrator, refunds, fake_gateway, ledger, seed_order
):
    await seed_order(44, "500.00")
    await checkout_and_capture(orchestrator, fake_gateway, 44, "500.00", "pay_9")

    result = await refunds.refund("pay_9")

    assert result.changed is True
    assert result.refund_type == RefundType.FULL
    assert result.amount == Decimal("500.00")
    assert result.payment_status == PaymentStatus.REFUNDED
    assert fake_gateway.refund_calls[0]["amount_minor"] is None
    assert fake_gateway.refund_calls[0]["idempotency_key"] == "refund_pay_9_0_50000"

    record = await ledger.get_payment_record(44)
    assert record.payment_status == PaymentStatus.REFUNDED
    assert record.refund_id == result.refund_id
    assert record.refund_amount == Decimal("500.00")
    assert (await ledger.get_order(44)).order_status == OrderStatus.REFUNDED

    with pytest.raises(InvalidTransition):
        await refunds.refund("pay_9")
    assert len(fake_gateway.refund_calls) == 1


@pytest.mark.asyncio
async def test_partial_refunds_up_to_full(orchestrator, refunds, fake_gateway, ledger, seed_order):
    await seed_order(44, "500.00")
    await checkout_and_capture(orchestrator, fake_gateway, 44, "500.00", "pay_9")

    first = await refunds.refund("pay_9", Decimal("200.00"), "damaged item")
    assert first.refund_type == RefundType.PARTIAL
    assert first.payment_status == PaymentStatus.CAPTURED
    assert first.refunded_total == Decimal("200.00")

    record = await ledger.get_payment_record(44)
    assert record.payment_status == PaymentStatus.CAPTURED
    assert record.refund_amount == Decimal("200.00")
    assert record.refund_id == first.refund_id
    assert (await ledger.get_order(44)).order_status == OrderStatus.PAID

    with pytest.raises(InvalidRefundAmount):
        await refunds.refund("pay_9", "300.01")

    # Sin monto: el saldo restante
    second = await refunds.refund("pay_9")
    assert second.amount == Decimal("300.00")
    assert second.refund_type == RefundType.FULL
    assert second.payment_status == PaymentStatus.REFUNDED
    assert fake_gateway.refund_calls[-1]["amount_minor"] == 30000
    assert fake_gateway.refund_calls[-1]["idempotency_key"] == refund_idempotency_key("pay_9", 20000, 30000)

    assert (await ledger.get_order(44)).order_status == OrderStatus.REFUNDED
    transitions = await ledger.list_transitions(44)
    assert [t.to_status for t in transitions] == ["created", "captured", "refunded"]


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", ["0", "-5", "500.01", "10.001", "abc"])
async def test_invalid_refund_amounts_do_not_call_gateway(
    orchestrator, refunds, fake_gateway, seed_order, amount
):
    await seed_order(44, "500.00")
    await checkout_and_capture(orchestrator, fake_gateway, 44, "500.00", "pay_9")

    with pytest.raises(InvalidRefundAmount):
        await refunds.refund("pay_9", amount)
    assert fake_gateway.refund_calls == []


@pytest.mark.asyncio
async def test_refund_requires_captured(orchestrator, refunds, fake_gateway, ledger, seed_order):
    await seed_order(44, "500.00")
    created = await orchestrator.create_order(44, "500.00")
    await orchestrator.apply_webhook_event(
        "payment.authorized",
        {
            "event": "payment.authorized",
            "payload": {
                "payment": {
                    "entity": {
                        "id": "pay_9",
                        "amount": 50000,
                        "currency": "INR",
                        "status": "authorized",
                        "order_id": created.record.payment_order_id,
                        "notes": {"order_id": "44"},
                    }
                }
            },
        },
    )

    with pytest.raises(InvalidTransition):
        await refunds.refund("pay_9")
    assert fake_gateway.refund_calls == []


@pytest.mark.asyncio
async def test_refund_unknown_payment(refunds):
    with pytest.raises(PaymentNotFound):
        await refunds.refund("pay_missing")


@pytest.mark.asyncio
async def test_refunds_disabled(ledger, fake_gateway):
    coordinator = RefundCoordinator(ledger, fake_gateway, make_settings(refunds_enabled=False))
    with pytest.raises(RefundsDisabled):
        await coordinator.refund("pay_9")


@pytest.mark.asyncio
async def test_gateway_rejection_leaves_state_untouched(orchestrator, refunds, fake_gateway, ledger, seed_order):
    await seed_order(44, "500.00")
    await checkout_and_capture(orchestrator, fake_gateway, 44, "500.00", "pay_9")
    fake_gateway.fail_with = GatewayRejected("The amount is invalid", status_code=400)

    with pytest.raises(GatewayRejected):
        await refunds.refund("pay_9", "100.00")

    record = await ledger.get_payment_record(44)
    assert record.payment_status == PaymentStatus.CAPTURED
    assert record.refund_id is None
    assert record.refund_amount == Decimal("0")


@pytest.mark.asyncio
async def test_refund_webhook_after_api_refund_is_noop(orchestrator, refunds, fake_gateway, ledger, seed_order):
    await seed_order(44, "500.00")
    await checkout_and_capture(orchestrator, fake_gateway, 44, "500.00", "pay_9")
    result = await refunds.refund("pay_9", "100.00")

    webhook = await orchestrator.apply_webhook_event(
        "refund.processed",
        refund_event(refund_id=result.refund_id, payment_id="pay_9", amount_minor=10000, order_id=44),
    )

    assert webhook["status"] == "noop"
    record = await ledger.get_payment_record(44)
    assert record.refund_amount == Decimal("100.00")


@pytest.mark.asyncio
async def test_refund_initiated_outside_is_reconciled_once(orchestrator, fake_gateway, ledger, seed_order):
    await seed_order(44, "500.00")
    await checkout_and_capture(orchestrator, fake_gateway, 44, "500.00", "pay_9")
    event = refund_event(refund_id="rfnd_dashboard", payment_id="pay_9", amount_minor=50000, order_id=44)

    first = await orchestrator.apply_webhook_event("refund.processed", event)
    second = await orchestrator.apply_webhook_event("refund.processed", event)

    assert first["status"] == "processed"
    assert first["payment_status"] == "refunded"
    assert second["status"] == "noop"
    refund = await ledger.get_refund("rfnd_dashboard")
    assert refund.source == "webhook"
    assert (await ledger.get_order(44)).order_status == OrderStatus.REFUNDED


@pytest.mark.asyncio
async def test_refund_webhook_for_unknown_payment_is_ignored(orchestrator):
    result = await orchestrator.apply_webhook_event(
        "refund.processed",
        refund_event(refund_id="rfnd_x", payment_id="pay_unknown", amount_minor=100),
    )
    assert result["status"] == "ignored"
    assert result["reason"] == "payment_not_found"


@pytest.mark.asyncio
async def test_refund_webhook_with_wrong_order_is_rejected(orchestrator, fake_gateway, ledger, seed_order):
    await seed_order(44, "500.00")
    await checkout_and_capture(orchestrator, fake_gateway, 44, "500.00", "pay_9")

    result = await orchestrator.apply_webhook_event(
        "refund.processed",
        refund_event(refund_id="rfnd_x", payment_id="pay_9", amount_minor=100, order_id=45),
    )

    assert result["status"] == "rejected"
    assert await ledger.get_refund("rfnd_x") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", ["abc", {"value": 1}])
async def test_refund_webhook_with_unparseable_amount_is_ignored(
    orchestrator, fake_gateway, ledger, seed_order, amount
):
    await seed_order(44, "500.00")
    await checkout_and_capture(orchestrator, fake_gateway, 44, "500.00", "pay_9")
    event = refund_event(refund_id="rfnd_bad", payment_id="pay_9", amount_minor=100, order_id=44)
    event["payload"]["refund"]["entity"]["amount"] = amount

    result = await orchestrator.apply_webhook_event("refund.processed", event)

    assert result == {"status": "ignored", "reason": "malformed_payload"}
    assert await ledger.get_refund("rfnd_bad") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [None, 0, -100])
async def test_refund_webhook_without_positive_amount_is_ignored(
    orchestrator, fake_gateway, ledger, seed_order, amount
):
    await seed_order(44, "500.00")
    await checkout_and_capture(orchestrator, fake_gateway, 44, "500.00", "pay_9")
    event = refund_event(refund_id="rfnd_zero", payment_id="pay_9", amount_minor=100, order_id=44)
    entity = event["payload"]["refund"]["entity"]
    if amount is None:
        del entity["amount"]
    else:
        entity["amount"] = amount

    result = await orchestrator.apply_webhook_event("refund.processed", event)

    assert result["status"] == "ignored"
    assert result["reason"] == "malformed_payload"
    assert await ledger.get_refund("rfnd_zero") is None
    record = await ledger.get_payment_record(44)
    assert record.refund_id is None
    assert record.refund_amount in (None, Decimal("0"))
    assert record.payment_status == PaymentStatus.CAPTURED
# Fin del archivo
