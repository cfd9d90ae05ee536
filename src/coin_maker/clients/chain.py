# -*- coding: utf-8 -*-
"""Read-only chain query interface and the transaction DTO it returns."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, cast

from coin_maker.utils.units import parse_chain_value


@dataclass(frozen=True, slots=True)
class ChainTransaction:
    """An incoming transaction as seen by the transaction index.

    value is already normalized to standard units (see parse_chain_value).
    """

    hash: Optional[str]
    value: Decimal
    sender: Optional[str] = None
    """Source address of the incoming message; None when the chain data hides it."""
    utime: int = 0
    """Unix timestamp (seconds) of the transaction; 0 if unknown."""

    @classmethod
    def from_response(cls, tx: dict[str, Any]) -> ChainTransaction:
        """Build from a raw transaction object (TON Center v2 shape).

        The value comes from the incoming message when it carries one,
        otherwise from a top-level value field.
        """
        in_msg_raw = tx.get("in_msg") or tx.get("in_message")
        in_msg = cast(dict[str, Any], in_msg_raw) if isinstance(in_msg_raw, dict) else {}

        if in_msg.get("value"):
            value = parse_chain_value(in_msg.get("value"))
        else:
            value = parse_chain_value(tx.get("value"))

        sender = in_msg.get("source") or in_msg.get("source_address") or tx.get("source") or None

        tx_id = tx.get("transaction_id")
        tx_hash = (
            (tx_id.get("hash") if isinstance(tx_id, dict) else None)
            or tx.get("id")
            or tx.get("hash")
            or in_msg.get("hash")
            or None
        )

        utime_raw = tx.get("utime") or tx.get("time") or 0
        try:
            utime = int(utime_raw)
        except (TypeError, ValueError, OverflowError):
            utime = 0

        return cls(
            hash=str(tx_hash) if tx_hash is not None else None,
            value=value,
            sender=str(sender) if sender else None,
            utime=utime,
        )


class IChainQueryClient(ABC):
    """Interface for querying a transaction index (read-only)."""

    @abstractmethod
    async def get_transaction(self, tx_hash: str) -> Optional[ChainTransaction]:
        """Return the transaction with this hash, or None if the index does not know it.

        Raises:
            ChainUnavailableError: If the index cannot be queried.
        """
        ...

    @abstractmethod
    async def get_transactions_for_address(
        self,
        address: str,
        limit: int = 50,
    ) -> list[ChainTransaction]:
        """Return up to limit recent transactions of address, in the index's order.

        Raises:
            ChainUnavailableError: If the index cannot be queried.
        """
        ...
