# -*- coding: utf-8 -*-
from decimal import Decimal

import pytest

from storefront.modules.payments.errors import InvalidAmount
from storefront.modules.payments.utils.amounts import (
    amounts_match,
    from_minor,
    normalize_currency,
    to_minor,
    validate_amount,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (Decimal("500.00"), 50000),
        ("10.005", 1001),
        (0.1 + 0.2, 30),
        (1, 100),
    ],
)
def test_to_minor_rounds_half_up(value, expected):
    assert to_minor(value) == expected


def test_from_minor_has_two_places():
    assert from_minor(90000) == Decimal("900.00")
    assert str(from_minor(5)) == "0.05"


def test_validate_amount_normalizes():
    assert validate_amount("500", "INR") == Decimal("500.00")


@pytest.mark.parametrize(
    "value,currency",
    [
        ("0.49", "INR"),
        ("100000000.01", "INR"),
        ("1000000.01", "USD"),
        ("10.001", "INR"),
        ("abc", "INR"),
        ("NaN", "INR"),
        ("10.00", "JPY"),
    ],
)
def test_validate_amount_rejects(value, currency):
    with pytest.raises(InvalidAmount):
        validate_amount(value, currency)


def test_amounts_match_respects_tolerance():
    assert amounts_match(50000, 50000)
    assert not amounts_match(50000, 50001)
    assert amounts_match(50000, 50001, tolerance_minor=1)
    assert not amounts_match(100000, 90000, tolerance_minor=1)


def test_normalize_currency_defaults():
    assert normalize_currency(None, "INR") == "INR"
    assert normalize_currency(" usd ", "INR") == "USD"
# Fin del archivo
