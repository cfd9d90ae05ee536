# -*- coding: utf-8 -*-
"""Unit tests for TonCenterClient and ChainTransaction parsing."""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from typing import Any, Optional
from unittest.mock import AsyncMock

import pytest

from coin_maker.clients.chain import ChainTransaction
from coin_maker.clients.toncenter import TonCenterClient
from coin_maker.exceptions import ChainApiError, ChainUnavailableError


def _settings(*, api_key: Optional[str] = "secret") -> Any:
    return SimpleNamespace(
        chain=SimpleNamespace(base_url="https://toncenter.test/api/v2/", api_key=api_key)
    )


def _client(response: Any, *, api_key: Optional[str] = "secret") -> tuple[TonCenterClient, AsyncMock]:
    http = AsyncMock()
    if isinstance(response, Exception):
        http.get.side_effect = response
    else:
        http.get.return_value = response
    return TonCenterClient(http, _settings(api_key=api_key)), http


# ---------------------------------------------------------------------------
# ChainTransaction.from_response
# ---------------------------------------------------------------------------


def test_from_response_reads_in_msg_and_normalizes_nano_value() -> None:
    tx = ChainTransaction.from_response(
        {
            "utime": 1_700_000_000,
            "transaction_id": {"hash": "h1", "lt": "1"},
            "in_msg": {"source": "UQsender", "value": "2000000000000"},
        }
    )

    assert tx.hash == "h1"
    assert tx.value == Decimal("2000")
    assert tx.sender == "UQsender"
    assert tx.utime == 1_700_000_000


def test_from_response_keeps_small_values_as_is() -> None:
    tx = ChainTransaction.from_response({"in_msg": {"value": "1.5"}})

    assert tx.value == Decimal("1.5")


def test_from_response_falls_back_to_top_level_fields() -> None:
    tx = ChainTransaction.from_response(
        {"id": "h2", "value": 3, "source": "UQtop", "time": "1700000001"}
    )

    assert tx.hash == "h2"
    assert tx.value == Decimal("3")
    assert tx.sender == "UQtop"
    assert tx.utime == 1_700_000_001


def test_from_response_alternate_message_keys() -> None:
    tx = ChainTransaction.from_response(
        {"in_message": {"source_address": "UQalt", "value": "7", "hash": "h3"}}
    )

    assert tx.hash == "h3"
    assert tx.sender == "UQalt"
    assert tx.value == Decimal("7")


def test_from_response_missing_everything_is_zero_value_without_sender() -> None:
    tx = ChainTransaction.from_response({"in_msg": {"value": "garbage"}})

    assert tx.value == Decimal("0")
    assert tx.sender is None
    assert tx.hash is None
    assert tx.utime == 0


@pytest.mark.parametrize("utime", [float("inf"), float("nan"), "soon", [1]])
def test_from_response_unusable_time_is_zero(utime: Any) -> None:
    tx = ChainTransaction.from_response({"utime": utime, "in_msg": {"value": "10"}})

    assert tx.utime == 0
    assert tx.value == Decimal("10")


# ---------------------------------------------------------------------------
# TonCenterClient
# ---------------------------------------------------------------------------


async def test_get_transaction_calls_endpoint_with_api_key() -> None:
    client, http = _client(
        {"ok": True, "result": [{"transaction_id": {"hash": "h1"}, "in_msg": {"value": "5"}}]}
    )

    tx = await client.get_transaction("h1")

    assert tx is not None
    assert tx.hash == "h1"
    assert tx.value == Decimal("5")
    http.get.assert_awaited_once()
    args, kwargs = http.get.call_args
    assert args[0] == "https://toncenter.test/api/v2/getTransaction"
    assert kwargs["params"] == {"hash": "h1", "api_key": "secret"}
    assert "secret" not in kwargs["log_url"]


async def test_get_transaction_omits_api_key_when_unset() -> None:
    client, http = _client({"ok": True, "result": {"hash": "h1", "value": 1}}, api_key=None)

    tx = await client.get_transaction("h1")

    assert tx is not None and tx.hash == "h1"
    assert http.get.call_args.kwargs["params"] == {"hash": "h1"}


@pytest.mark.parametrize(
    "response",
    [{"ok": False, "error": "not found"}, {"ok": True, "result": []}, ["unexpected"]],
)
async def test_get_transaction_returns_none_without_result(response: Any) -> None:
    client, _ = _client(response)

    assert await client.get_transaction("h1") is None


async def test_get_transaction_propagates_unavailability() -> None:
    client, _ = _client(ChainApiError("GET failed", url="u"))

    with pytest.raises(ChainUnavailableError):
        await client.get_transaction("h1")


async def test_get_transactions_for_address_parses_list_in_order() -> None:
    client, http = _client(
        {
            "ok": True,
            "result": [
                {"transaction_id": {"hash": "newest"}, "in_msg": {"value": "1"}},
                "skipped",
                {"transaction_id": {"hash": "older"}, "in_msg": {"value": "2"}},
            ],
        }
    )

    txs = await client.get_transactions_for_address("UQseller", limit=20)

    assert [t.hash for t in txs] == ["newest", "older"]
    assert http.get.call_args.kwargs["params"] == {
        "address": "UQseller",
        "limit": 20,
        "api_key": "secret",
    }


async def test_get_transactions_for_address_not_ok_is_unavailable() -> None:
    client, _ = _client({"ok": False, "error": "rate limit"})

    with pytest.raises(ChainUnavailableError):
        await client.get_transactions_for_address("UQseller")


async def test_get_transactions_for_address_non_list_result_is_empty() -> None:
    client, _ = _client({"ok": True, "result": {"not": "a list"}})

    assert await client.get_transactions_for_address("UQseller") == []
