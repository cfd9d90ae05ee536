# -*- coding: utf-8 -*-
"""Unit tests for domain models and their document mapping."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from coin_maker.models.balance import Balance
from coin_maker.models.sale import Sale, SaleStatus
from coin_maker.models.token import Token, TokenType


@pytest.fixture
def created_at() -> datetime:
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


def test_listing_document_has_only_listing_fields(created_at: datetime) -> None:
    token = Token.create_listing(
        "L", "LST", "UQowner", Decimal("10"), Decimal("2.5"), id="t1", created_at=created_at
    )

    doc = token.to_document()

    assert doc == {
        "id": "t1",
        "type": "listing",
        "name": "L",
        "ticker": "LST",
        "owner": "UQowner",
        "createdAt": to_ms(created_at),
        "totalSupply": Decimal("10"),
        "remainingSupply": Decimal("10"),
        "pricePerToken": Decimal("2.5"),
    }
    assert Token.from_document("t1", doc) == token


def test_from_document_treats_unknown_type_as_user(created_at: datetime) -> None:
    token = Token.from_document("t2", {"type": "weird", "dynamicPrice": "0.2"})

    assert token.type == TokenType.USER
    assert token.dynamic_price == Decimal("0.2")
    assert token.id == "t2"


def test_create_user_rejects_non_positive_price() -> None:
    with pytest.raises(ValueError):
        Token.create_user("U", "U", "UQowner", Decimal("0"))


def test_sale_lifecycle(created_at: datetime) -> None:
    sale = Sale.create("t1", "LST", "UQbuyer", "UQseller", Decimal("4"), Decimal("10"), id="s1", created_at=created_at)

    assert sale.status == SaleStatus.PENDING
    assert "txHash" not in sale.to_document()

    checked = sale.with_pending_check()
    assert checked.status == SaleStatus.PENDING_CHECK
    assert not checked.is_confirmed

    confirmed = checked.with_confirmed("h1", created_at)
    assert confirmed.is_confirmed
    doc = confirmed.to_document()
    assert doc["status"] == "confirmed"
    assert doc["txHash"] == "h1"
    assert doc["confirmedAt"] == to_ms(created_at)
    assert Sale.from_document("s1", doc) == confirmed


def test_sale_from_document_unknown_status_is_pending() -> None:
    sale = Sale.from_document("s9", {"status": "lost", "amountTokens": 1, "cost": "2"})

    assert sale.status == SaleStatus.PENDING
    assert sale.cost == Decimal("2")


def test_balance_document_id() -> None:
    balance = Balance(token_id="t1", address="UQa", amount=Decimal("1"))

    assert balance.doc_id == "t1__UQa"
    assert Balance.from_document(balance.to_document()) == balance


def to_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)
