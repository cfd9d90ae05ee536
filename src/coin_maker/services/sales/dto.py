"""Sale engine DTOs: quote, confirmation result and chain lookup outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal, Optional, Union

from coin_maker.clients.chain import ChainTransaction

ConfirmationReason = Literal["tx_mismatch", "txs_unavailable", "not_found"]
ConfirmationMessage = Literal["sale_confirmed", "already_confirmed"]


@dataclass(frozen=True, slots=True)
class SaleQuote:
    """Result of create_sale: where to pay and how much."""

    sale_id: str
    cost: Decimal
    receiver: str


@dataclass(frozen=True, slots=True)
class ConfirmationResult:
    """Outcome of confirm_sale.

    ok=True carries a message; ok=False carries a reason. Chain-side
    problems are reported here, never raised.
    """

    ok: bool
    message: Optional[ConfirmationMessage] = None
    reason: Optional[ConfirmationReason] = None
    tx_hash: Optional[str] = None
    found_amount: Optional[Decimal] = None
    """Amount seen on chain (tx_mismatch only)."""
    sender: Optional[str] = None
    """Sender seen on chain (tx_mismatch only)."""

    @classmethod
    def confirmed(cls, tx_hash: Optional[str]) -> ConfirmationResult:
        return cls(ok=True, message="sale_confirmed", tx_hash=tx_hash)

    @classmethod
    def already_confirmed(cls, tx_hash: Optional[str] = None) -> ConfirmationResult:
        return cls(ok=True, message="already_confirmed", tx_hash=tx_hash)

    @classmethod
    def failed(
        cls,
        reason: ConfirmationReason,
        *,
        found_amount: Optional[Decimal] = None,
        sender: Optional[str] = None,
    ) -> ConfirmationResult:
        return cls(ok=False, reason=reason, found_amount=found_amount, sender=sender)


# ---------------------------------------------------------------------------
# Direct-hash lookup outcome
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class HashMatch:
    """The transaction exists and pays the sale."""

    tx_hash: str
    transaction: ChainTransaction


@dataclass(frozen=True, slots=True)
class HashMismatch:
    """The transaction exists but does not pay the sale (amount too low or wrong sender)."""

    transaction: ChainTransaction


@dataclass(frozen=True, slots=True)
class LookupFailure:
    """The transaction could not be looked up; the scan path takes over."""

    cause: Literal["unavailable", "not_found"]
    detail: Optional[str] = None


HashLookupResult = Union[HashMatch, HashMismatch, LookupFailure]


@dataclass(frozen=True, slots=True)
class ScanMatch:
    """First recent seller transaction that covers the cost."""

    transaction: ChainTransaction
    sender_verified: bool
    """True when the transaction exposes a sender equal to the buyer."""
