"""Token: a fungible token definition, either a fixed-supply listing or a variable-price user token.

Stored in the ``tokens`` collection with camelCase keys. Listing tokens carry
totalSupply/remainingSupply/pricePerToken; user tokens carry
dynamicPrice/supplyIssued.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from coin_maker.utils.ids import from_millis, new_id, to_millis, utc_now
from coin_maker.utils.units import to_decimal


class TokenType(str, Enum):
    """Pricing model of a token."""

    USER = "user"
    LISTING = "listing"


@dataclass(frozen=True, slots=True)
class Token:
    """Token definition.

    Invariants: remaining_supply <= total_supply for listings; dynamic_price > 0 for user tokens.
    """

    id: str
    type: TokenType
    name: str
    ticker: str
    owner: str
    """Wallet address that receives payments for this token."""
    created_at: datetime

    # listing
    total_supply: Optional[Decimal] = None
    remaining_supply: Optional[Decimal] = None
    price_per_token: Optional[Decimal] = None

    # user
    dynamic_price: Optional[Decimal] = None
    supply_issued: Optional[Decimal] = None

    @property
    def is_listing(self) -> bool:
        return self.type == TokenType.LISTING

    def with_remaining_supply(self, remaining: Decimal) -> Token:
        """Return a copy with remaining_supply set (listing tokens)."""
        return replace(self, remaining_supply=remaining)

    def with_price_update(self, dynamic_price: Decimal, supply_issued: Decimal) -> Token:
        """Return a copy with a new dynamic price and issued counter (user tokens)."""
        return replace(self, dynamic_price=dynamic_price, supply_issued=supply_issued)

    def to_document(self) -> dict[str, Any]:
        """Document representation (camelCase, epoch millis). Omits fields of the other token type."""
        doc: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "ticker": self.ticker,
            "owner": self.owner,
            "createdAt": to_millis(self.created_at),
        }
        if self.is_listing:
            doc["totalSupply"] = self.total_supply
            doc["remainingSupply"] = self.remaining_supply
            doc["pricePerToken"] = self.price_per_token
        else:
            doc["dynamicPrice"] = self.dynamic_price
            doc["supplyIssued"] = self.supply_issued
        return doc

    @classmethod
    def from_document(cls, doc_id: str, doc: dict[str, Any]) -> Token:
        """Build from a stored document. Any type other than 'listing' is a user token."""
        token_type = TokenType.LISTING if doc.get("type") == "listing" else TokenType.USER
        created = doc.get("createdAt")
        return cls(
            id=str(doc.get("id") or doc_id),
            type=token_type,
            name=str(doc.get("name") or ""),
            ticker=str(doc.get("ticker") or ""),
            owner=str(doc.get("owner") or ""),
            created_at=from_millis(created) if isinstance(created, (int, float)) else utc_now(),
            total_supply=to_decimal(doc.get("totalSupply")),
            remaining_supply=to_decimal(doc.get("remainingSupply")),
            price_per_token=to_decimal(doc.get("pricePerToken")),
            dynamic_price=to_decimal(doc.get("dynamicPrice")),
            supply_issued=to_decimal(doc.get("supplyIssued")),
        )

    @classmethod
    def create_listing(
        cls,
        name: str,
        ticker: str,
        owner: str,
        total_supply: Decimal,
        price_per_token: Decimal,
        *,
        id: str | None = None,
        created_at: datetime | None = None,
    ) -> Token:
        """Create a fixed-supply listing token; remaining supply starts at total supply."""
        return cls(
            id=id or new_id(),
            type=TokenType.LISTING,
            name=name,
            ticker=ticker,
            owner=owner,
            created_at=created_at or utc_now(),
            total_supply=total_supply,
            remaining_supply=total_supply,
            price_per_token=price_per_token,
        )

    @classmethod
    def create_user(
        cls,
        name: str,
        ticker: str,
        owner: str,
        dynamic_price: Decimal,
        *,
        id: str | None = None,
        created_at: datetime | None = None,
    ) -> Token:
        """Create a variable-price user token with nothing issued yet."""
        if dynamic_price <= 0:
            raise ValueError("dynamic_price must be > 0")
        return cls(
            id=id or new_id(),
            type=TokenType.USER,
            name=name,
            ticker=ticker,
            owner=owner,
            created_at=created_at or utc_now(),
            dynamic_price=dynamic_price,
            supply_issued=Decimal(0),
        )
