"""Tests for money helpers"""
import pytest
from decimal import Decimal

from storefront.services.money import format_money, money_sum, round_money, to_decimal, to_float


@pytest.mark.parametrize("value,expected", [
    (None, Decimal("0")),
    (0.1, Decimal("0.1")),
    ("1250000", Decimal("1250000")),
    ("abc", Decimal("0")),
    (Decimal("5.5"), Decimal("5.5")),
])
def test_to_decimal(value, expected):
    assert to_decimal(value) == expected


def test_round_money():
    assert round_money("10.005") == Decimal("10.01")
    assert round_money("1249999.5", to_int=True) == Decimal("1250000")


def test_money_sum_avoids_float_drift():
    assert money_sum([0.1, 0.2]) == Decimal("0.3")
    assert money_sum([]) == Decimal("0")


@pytest.mark.parametrize("value,expected", [
    (1250000, "Rp 1.250.000"),
    (0, "Rp 0"),
    (999, "Rp 999"),
    ("-5000", "-Rp 5.000"),
])
def test_format_money(value, expected):
    assert format_money(value) == expected


def test_to_float():
    assert to_float(Decimal("25000.50")) == 25000.5
