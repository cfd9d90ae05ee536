"""Sale: a purchase quote awaiting (or having received) on-chain payment.

cost is fixed when the sale is created and is the amount the chain evidence
must cover. CONFIRMED is terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from coin_maker.utils.ids import from_millis, new_id, to_millis, utc_now
from coin_maker.utils.units import to_decimal


class SaleStatus(str, Enum):
    """Sale lifecycle state."""

    PENDING = "pending"
    PENDING_CHECK = "pending_check"
    """Confirmation was attempted but no payment was found (or the chain was unavailable)."""
    CONFIRMED = "confirmed"


@dataclass(frozen=True, slots=True)
class Sale:
    """One quoted purchase of amount_tokens of a token by buyer, paid to seller."""

    id: str
    token_id: str
    token_ticker: str
    buyer: str
    seller: str
    """Receiving wallet (token owner) the payment must reach."""
    amount_tokens: Decimal
    cost: Decimal
    status: SaleStatus
    created_at: datetime
    tx_hash: Optional[str] = None
    confirmed_at: Optional[datetime] = None

    @property
    def is_confirmed(self) -> bool:
        return self.status == SaleStatus.CONFIRMED

    def with_pending_check(self) -> Sale:
        """Return a copy with status PENDING_CHECK."""
        return replace(self, status=SaleStatus.PENDING_CHECK)

    def with_confirmed(self, tx_hash: str | None, confirmed_at: datetime | None = None) -> Sale:
        """Return a copy with status CONFIRMED, the matched hash and confirmation time."""
        return replace(
            self,
            status=SaleStatus.CONFIRMED,
            tx_hash=tx_hash,
            confirmed_at=confirmed_at or utc_now(),
        )

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "id": self.id,
            "tokenId": self.token_id,
            "tokenTicker": self.token_ticker,
            "buyer": self.buyer,
            "seller": self.seller,
            "amountTokens": self.amount_tokens,
            "cost": self.cost,
            "status": self.status.value,
            "createdAt": to_millis(self.created_at),
        }
        if self.is_confirmed:
            doc["txHash"] = self.tx_hash
            doc["confirmedAt"] = to_millis(self.confirmed_at) if self.confirmed_at else None
        return doc

    @classmethod
    def from_document(cls, doc_id: str, doc: dict[str, Any]) -> Sale:
        created = doc.get("createdAt")
        confirmed = doc.get("confirmedAt")
        try:
            status = SaleStatus(doc.get("status") or SaleStatus.PENDING.value)
        except ValueError:
            status = SaleStatus.PENDING
        return cls(
            id=str(doc.get("id") or doc_id),
            token_id=str(doc.get("tokenId") or ""),
            token_ticker=str(doc.get("tokenTicker") or ""),
            buyer=str(doc.get("buyer") or ""),
            seller=str(doc.get("seller") or ""),
            amount_tokens=to_decimal(doc.get("amountTokens"), Decimal(0)) or Decimal(0),
            cost=to_decimal(doc.get("cost"), Decimal(0)) or Decimal(0),
            status=status,
            created_at=from_millis(created) if isinstance(created, (int, float)) else utc_now(),
            tx_hash=doc.get("txHash"),
            confirmed_at=from_millis(confirmed) if isinstance(confirmed, (int, float)) else None,
        )

    @classmethod
    def create(
        cls,
        token_id: str,
        token_ticker: str,
        buyer: str,
        seller: str,
        amount_tokens: Decimal,
        cost: Decimal,
        *,
        id: str | None = None,
        created_at: datetime | None = None,
    ) -> Sale:
        """Create a new PENDING sale.

        Raises:
            ValueError: If amount_tokens <= 0.
        """
        if amount_tokens <= 0:
            raise ValueError("amount_tokens must be > 0")
        return cls(
            id=id or new_id(),
            token_id=token_id,
            token_ticker=token_ticker,
            buyer=buyer,
            seller=seller,
            amount_tokens=amount_tokens,
            cost=cost,
            status=SaleStatus.PENDING,
            created_at=created_at or utc_now(),
        )
