# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit and API tests."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any, Optional

import pytest

from coin_maker.clients.chain import ChainTransaction, IChainQueryClient
from coin_maker.exceptions import ChainUnavailableError
from coin_maker.models.token import Token
from coin_maker.persistence.repositories.in_memory import InMemoryDocumentRepository
from coin_maker.services.history import HistoryLog
from coin_maker.services.sales import SaleEngine
from coin_maker.services.token_ledger import TokenLedger
from coin_maker.services.transfer import TransferHandler

NOW_TS = 1_771_000_000
"""Fixed unix time (seconds) used as the engine clock."""

PLATFORM_WALLET = "UQPlatformWallet0000000000000000000000000000000000"


class FakeChainClient(IChainQueryClient):
    """In-memory transaction index.

    by_hash maps hashes to transactions; by_address maps addresses to the
    list returned by the scan. Set the *_error attributes to make a call
    raise ChainUnavailableError.
    """

    def __init__(self) -> None:
        self.by_hash: dict[str, ChainTransaction] = {}
        self.by_address: dict[str, list[ChainTransaction]] = {}
        self.hash_error: Optional[Exception] = None
        self.scan_error: Optional[Exception] = None
        self.hash_calls: list[str] = []
        self.scan_calls: list[tuple[str, int]] = []

    async def get_transaction(self, tx_hash: str) -> Optional[ChainTransaction]:
        self.hash_calls.append(tx_hash)
        if self.hash_error is not None:
            raise self.hash_error
        return self.by_hash.get(tx_hash)

    async def get_transactions_for_address(
        self,
        address: str,
        limit: int = 50,
    ) -> list[ChainTransaction]:
        self.scan_calls.append((address, limit))
        if self.scan_error is not None:
            raise self.scan_error
        return list(self.by_address.get(address, []))[:limit]


@pytest.fixture
def D() -> Callable[[Any], Decimal]:
    """Decimal helper: D('1.23') -> Decimal('1.23')."""
    return lambda value: Decimal(str(value))


@pytest.fixture
def buyer() -> str:
    """Default buyer wallet."""
    return "UQBuyerWallet_aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"


@pytest.fixture
def owner() -> str:
    """Default token owner (receiving wallet)."""
    return "UQOwnerWallet_bbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb"


@pytest.fixture
def platform_wallet() -> str:
    return PLATFORM_WALLET


@pytest.fixture
def now_ts() -> int:
    return NOW_TS


@pytest.fixture
def repo() -> InMemoryDocumentRepository:
    """Fresh in-memory document store per test."""
    return InMemoryDocumentRepository()


@pytest.fixture
def chain() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def unavailable() -> Callable[[], ChainUnavailableError]:
    return lambda: ChainUnavailableError("index down")


@pytest.fixture
def history(repo: InMemoryDocumentRepository) -> HistoryLog:
    return HistoryLog(repo)


@pytest.fixture
def ledger(repo: InMemoryDocumentRepository, platform_wallet: str) -> TokenLedger:
    return TokenLedger(repo, platform_wallet=platform_wallet)


@pytest.fixture
def engine(
    repo: InMemoryDocumentRepository,
    chain: FakeChainClient,
    ledger: TokenLedger,
    history: HistoryLog,
    now_ts: int,
) -> SaleEngine:
    return SaleEngine(repo, chain, ledger, history, clock=lambda: float(now_ts))


@pytest.fixture
def transfers(ledger: TokenLedger, history: HistoryLog) -> TransferHandler:
    return TransferHandler(ledger, history)


@pytest.fixture
def tx_factory(
    buyer: str,
    now_ts: int,
    D: Callable[[Any], Decimal],
) -> Callable[..., ChainTransaction]:
    """Build ChainTransaction with sensible defaults and easy overrides."""

    def _build(**overrides: Any) -> ChainTransaction:
        return ChainTransaction(
            hash=overrides.pop("hash", "tx-hash-1"),
            value=D(overrides.pop("value", "10")),
            sender=overrides.pop("sender", buyer),
            utime=overrides.pop("utime", now_ts - 60),
        )

    return _build


@pytest.fixture
def listing_factory(
    ledger: TokenLedger,
    owner: str,
) -> Callable[..., Any]:
    """Create and persist a listing token (async)."""

    async def _build(**overrides: Any) -> Token:
        return await ledger.create_token(
            type="listing",
            name=overrides.pop("name", "Listing Coin"),
            ticker=overrides.pop("ticker", "LST"),
            owner=overrides.pop("owner", owner),
            total_supply=overrides.pop("total_supply", 100),
            price_per_token=overrides.pop("price_per_token", "2.5"),
        )

    return _build


@pytest.fixture
def user_token_factory(
    ledger: TokenLedger,
    owner: str,
) -> Callable[..., Any]:
    """Create and persist a user token (async)."""

    async def _build(**overrides: Any) -> Token:
        return await ledger.create_token(
            type="user",
            name=overrides.pop("name", "User Coin"),
            ticker=overrides.pop("ticker", "USR"),
            owner=overrides.pop("owner", owner),
            dynamic_price=overrides.pop("dynamic_price", "0.1"),
        )

    return _build
