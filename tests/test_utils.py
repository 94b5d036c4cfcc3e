"""
Unit tests for display formatting helpers.
"""
import pytest

from debtfree.core.utils import (
    format_compact,
    format_currency,
    format_duration,
    format_percent,
    group_indian,
    round_half_up,
)


@pytest.mark.parametrize("value, expected", [
    (2.5, 3),
    (2.4999, 2),
    (-2.5, -2),
    (13.5, 14),
    (0, 0),
])
def test_round_half_up(value: float, expected: int):
    assert round_half_up(value) == expected


@pytest.mark.parametrize("n, expected", [
    (0, "0"),
    (999, "999"),
    (1000, "1,000"),
    (145000, "1,45,000"),
    (3200000, "32,00,000"),
    (123456789, "12,34,56,789"),
    (-56000, "-56,000"),
])
def test_group_indian(n: int, expected: str):
    assert group_indian(n) == expected


def test_format_currency_rounds_to_units():
    assert format_currency(5074.5) == "₹5,075"
    assert format_currency(1000, symbol="$") == "$1,000"


@pytest.mark.parametrize("amount, expected", [
    (32000000, "₹3.20 Cr"),
    (520000, "₹5.20 L"),
    (5000, "₹5.0K"),
    (750, "₹750"),
])
def test_format_compact(amount: float, expected: str):
    assert format_compact(amount) == expected


def test_format_percent():
    assert format_percent(55.2) == "55.2%"
    assert format_percent(10.119) == "10.1%"


@pytest.mark.parametrize("months, expected", [
    (0, "0m"),
    (7, "7m"),
    (12, "1y 0m"),
    (30, "2y 6m"),
])
def test_format_duration(months: int, expected: str):
    assert format_duration(months) == expected
