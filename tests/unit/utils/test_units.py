# -*- coding: utf-8 -*-
"""Unit tests for numeric helpers."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import pytest

from coin_maker.utils.units import parse_chain_value, round_nano, to_decimal


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1, Decimal("1")), (0.1, Decimal("0.1")), (" 2.5 ", Decimal("2.5")), (Decimal("3"), Decimal("3"))],
)
def test_to_decimal_coerces_numbers(value: Any, expected: Decimal) -> None:
    assert to_decimal(value) == expected


@pytest.mark.parametrize("value", [None, "abc", True, "nan", float("inf")])
def test_to_decimal_returns_default_for_garbage(value: Any) -> None:
    assert to_decimal(value) is None
    assert to_decimal(value, Decimal(0)) == Decimal(0)


def test_round_nano_rounds_half_up_to_nine_places() -> None:
    assert round_nano(Decimal("0.1234567895")) == Decimal("0.123456790")
    assert round_nano(Decimal("10")) == Decimal("10.000000000")


def test_parse_chain_value_divides_nano_units() -> None:
    assert parse_chain_value(2_000_000_000_000) == Decimal("2000")
    assert parse_chain_value("1000000000000") == Decimal("1000000000000")


@pytest.mark.parametrize("value", [None, "", "oops"])
def test_parse_chain_value_missing_is_zero(value: Any) -> None:
    assert parse_chain_value(value) == Decimal("0")
