# -*- coding: utf-8 -*-
"""
Verificación HMAC-SHA256 de confirmaciones del cliente y de webhooks.
"""
import pytest

from storefront.modules.payments.services.webhooks.signature_verification import (
    SignatureVerifier,
    compute_signature,
)

from tests.factories import TEST_KEY_SECRET, TEST_WEBHOOK_SECRET, client_signature, make_settings


def test_known_vector():
    # HMAC-SHA256("key", "The quick brown fox jumps over the lazy dog")
    assert compute_signature("key", b"The quick brown fox jumps over the lazy dog") == (
        "f7bc83f430538424b13298e6aa6fb143ef4d59a14946175997479dbc2d1a3cd8"
    )


def test_client_confirmation_valid(verifier):
    sig = client_signature("order_rzp_1", "pay_1")
    assert verifier.verify_client_confirmation("order_rzp_1", "pay_1", sig)


@pytest.mark.parametrize(
    "order_id,payment_id,signature",
    [
        ("order_rzp_1", "pay_2", client_signature("order_rzp_1", "pay_1")),
        ("order_rzp_2", "pay_1", client_signature("order_rzp_1", "pay_1")),
        ("order_rzp_1", "pay_1", client_signature("order_rzp_1", "pay_1", secret="other")),
        ("order_rzp_1", "pay_1", ""),
        ("order_rzp_1", None, "abc"),
        ("order_rzp_1", "pay_1", 1234),
        ("order_rzp_1", "pay_1", "\ud800abc"),
        ("order_rzp_1", "pay_\ud800", client_signature("order_rzp_1", "pay_1")),
    ],
)
def test_client_confirmation_invalid(verifier, order_id, payment_id, signature):
    assert not verifier.verify_client_confirmation(order_id, payment_id, signature)


def test_webhook_signature_over_raw_bytes(verifier):
    body = b'{"event":"payment.captured","payload":{}}'
    sig = compute_signature(TEST_WEBHOOK_SECRET, body)
    assert verifier.verify_webhook(body, sig)
    assert verifier.verify_webhook(body, f"  {sig}\n")
    # Re-serializar el JSON cambia los bytes y rompe la firma
    assert not verifier.verify_webhook(b'{"event": "payment.captured", "payload": {}}', sig)


def test_webhook_requires_bytes(verifier):
    body = '{"event":"payment.captured"}'
    sig = compute_signature(TEST_WEBHOOK_SECRET, body.encode())
    assert not verifier.verify_webhook(body, sig)


@pytest.mark.parametrize("header", [None, "", "   ", "deadbeef"])
def test_webhook_missing_or_wrong_header(verifier, header):
    assert not verifier.verify_webhook(b"{}", header)


def test_missing_secret_is_permissive_outside_production():
    v = SignatureVerifier(None, None, is_production=False)
    assert v.verify_webhook(b"{}", None)
    assert v.verify_client_confirmation("o", "p", "x")


def test_missing_secret_fails_closed_in_production():
    v = SignatureVerifier(None, None, is_production=True)
    assert not v.verify_webhook(b"{}", compute_signature("anything", b"{}"))
    assert not v.verify_client_confirmation("o", "p", "x")


def test_from_settings_reads_secrets():
    v = SignatureVerifier.from_settings(make_settings())
    sig = compute_signature(TEST_KEY_SECRET, b"order_rzp_9|pay_9")
    assert v.verify_client_confirmation("order_rzp_9", "pay_9", sig)
# Fin del archivo
