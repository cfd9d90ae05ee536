# -*- coding: utf-8 -*-
"""Unit tests for TokenLedger: token creation, pricing and balances."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import pytest

from coin_maker.exceptions import (
    InsufficientBalanceError,
    InsufficientSupplyError,
    InvalidAmountError,
    TokenNotFoundError,
    ValidationError,
)
from coin_maker.models.token import TokenType
from coin_maker.persistence.collection_names import TOKENS
from coin_maker.persistence.repositories.in_memory import InMemoryDocumentRepository
from coin_maker.services.token_ledger import TokenLedger


async def test_create_listing_starts_with_full_remaining_supply(
    ledger: TokenLedger,
    owner: str,
) -> None:
    token = await ledger.create_token(
        type="listing",
        name="Listing",
        ticker="LST",
        owner=owner,
        total_supply=100,
        price_per_token="2.5",
    )

    assert token.type == TokenType.LISTING
    assert token.id.startswith("id_")
    assert token.total_supply == Decimal("100")
    assert token.remaining_supply == Decimal("100")
    assert token.price_per_token == Decimal("2.5")
    stored = await ledger.get_token(token.id)
    assert stored.remaining_supply == Decimal("100")
    assert stored.owner == owner


async def test_create_user_token_defaults_price_and_owner(
    ledger: TokenLedger,
    platform_wallet: str,
) -> None:
    token = await ledger.create_token(type="user", name="Mine", ticker="MINE")

    assert token.type == TokenType.USER
    assert token.owner == platform_wallet
    assert token.dynamic_price == Decimal("0.1")
    assert token.supply_issued == Decimal("0")


async def test_unknown_type_creates_user_token(ledger: TokenLedger) -> None:
    token = await ledger.create_token(type="meme", name="Meme", ticker="MEME", dynamic_price=2)

    assert token.type == TokenType.USER
    assert token.dynamic_price == Decimal("2")


@pytest.mark.parametrize(
    ("type_", "name", "ticker"),
    [(None, "N", "T"), ("user", "", "T"), ("listing", "N", None)],
)
async def test_create_token_requires_type_name_and_ticker(
    ledger: TokenLedger,
    type_: Any,
    name: Any,
    ticker: Any,
) -> None:
    with pytest.raises(ValidationError) as exc_info:
        await ledger.create_token(type=type_, name=name, ticker=ticker)

    assert exc_info.value.code == "missing"


@pytest.mark.parametrize(
    ("total_supply", "price_per_token"),
    [(None, 1), (10, None), (0, 1)],
)
async def test_listing_requires_supply_and_price(
    ledger: TokenLedger,
    total_supply: Any,
    price_per_token: Any,
) -> None:
    with pytest.raises(ValidationError) as exc_info:
        await ledger.create_token(
            type="listing",
            name="L",
            ticker="L",
            total_supply=total_supply,
            price_per_token=price_per_token,
        )

    assert exc_info.value.code == "listing_missing"


async def test_negative_numbers_are_rejected(ledger: TokenLedger) -> None:
    with pytest.raises(InvalidAmountError):
        await ledger.create_token(
            type="listing", name="L", ticker="L", total_supply=-1, price_per_token=1
        )
    with pytest.raises(InvalidAmountError):
        await ledger.create_token(type="user", name="U", ticker="U", dynamic_price=-0.5)


async def test_get_token_unknown_raises(ledger: TokenLedger) -> None:
    with pytest.raises(TokenNotFoundError) as exc_info:
        await ledger.get_token("nope")

    assert exc_info.value.code == "token_not_found"


async def test_list_tokens_newest_first(
    ledger: TokenLedger,
    repo: InMemoryDocumentRepository,
) -> None:
    for token_id, created in (("old", 1_000), ("new", 3_000), ("mid", 2_000)):
        await repo.set(
            TOKENS,
            token_id,
            {"id": token_id, "type": "user", "name": token_id, "ticker": "T",
             "owner": "o", "createdAt": created, "dynamicPrice": Decimal("1")},
        )

    tokens = await ledger.list_tokens()

    assert [t.id for t in tokens] == ["new", "mid", "old"]


async def test_quote_cost_listing_and_user(
    ledger: TokenLedger,
    listing_factory: Callable[..., Any],
    user_token_factory: Callable[..., Any],
) -> None:
    listing = await listing_factory(total_supply=10, price_per_token="2.5")
    user = await user_token_factory(dynamic_price="0.3333333333")

    assert ledger.quote_cost(listing, Decimal("4")) == Decimal("10")
    # rounded to 9 decimals
    assert ledger.quote_cost(user, Decimal("1")) == Decimal("0.333333333")


async def test_quote_cost_rejects_amount_above_remaining_supply(
    ledger: TokenLedger,
    listing_factory: Callable[..., Any],
) -> None:
    listing = await listing_factory(total_supply=3)

    with pytest.raises(InsufficientSupplyError):
        ledger.quote_cost(listing, Decimal("3.5"))


async def test_apply_purchase_reduces_listing_supply_floored_at_zero(
    ledger: TokenLedger,
    listing_factory: Callable[..., Any],
) -> None:
    listing = await listing_factory(total_supply=10)

    first = await ledger.apply_purchase(listing.id, Decimal("4"))
    second = await ledger.apply_purchase(listing.id, Decimal("20"))

    assert first is not None and first.remaining_supply == Decimal("6")
    assert second is not None and second.remaining_supply == Decimal("0")
    stored = await ledger.get_token(listing.id)
    assert stored.remaining_supply == Decimal("0")
    assert stored.total_supply == Decimal("10")


async def test_apply_purchase_updates_user_price(
    ledger: TokenLedger,
    user_token_factory: Callable[..., Any],
) -> None:
    user = await user_token_factory(dynamic_price="2")

    await ledger.apply_purchase(user.id, Decimal("3"))

    stored = await ledger.get_token(user.id)
    # 2 * (1 + 0.005 * 3)
    assert stored.dynamic_price == Decimal("2.03")
    assert stored.supply_issued == Decimal("3")


async def test_apply_purchase_on_missing_token_is_skipped(ledger: TokenLedger) -> None:
    assert await ledger.apply_purchase("gone", Decimal("1")) is None


async def test_balances_default_to_zero_and_accumulate(
    ledger: TokenLedger,
    buyer: str,
) -> None:
    assert await ledger.get_balance("tok", buyer) == Decimal("0")

    await ledger.credit("tok", buyer, Decimal("2"))
    balance = await ledger.credit("tok", buyer, Decimal("1.5"))

    assert balance.amount == Decimal("3.5")
    assert balance.doc_id == f"tok__{buyer}"
    assert await ledger.get_balance("tok", buyer) == Decimal("3.5")


async def test_debit_beyond_balance_writes_nothing(
    ledger: TokenLedger,
    buyer: str,
) -> None:
    await ledger.credit("tok", buyer, Decimal("1"))

    with pytest.raises(InsufficientBalanceError) as exc_info:
        await ledger.debit("tok", buyer, Decimal("2"))

    assert exc_info.value.code == "insufficient"
    assert await ledger.get_balance("tok", buyer) == Decimal("1")


async def test_list_balances_filters_by_address(
    ledger: TokenLedger,
    buyer: str,
    owner: str,
) -> None:
    await ledger.credit("a", buyer, Decimal("1"))
    await ledger.credit("b", buyer, Decimal("2"))
    await ledger.credit("a", owner, Decimal("5"))

    balances = await ledger.list_balances(buyer)

    assert sorted((b.token_id, b.amount) for b in balances) == [
        ("a", Decimal("1")),
        ("b", Decimal("2")),
    ]
