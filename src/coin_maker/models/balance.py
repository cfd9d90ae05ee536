"""Balance of one token held by one address. Absent document means zero."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from coin_maker.utils.units import to_decimal


def balance_doc_id(token_id: str, address: str) -> str:
    """Document id of the (token, address) balance."""
    return f"{token_id}__{address}"


@dataclass(frozen=True, slots=True)
class Balance:
    token_id: str
    address: str
    amount: Decimal

    @property
    def doc_id(self) -> str:
        return balance_doc_id(self.token_id, self.address)

    def to_document(self) -> dict[str, Any]:
        return {"tokenId": self.token_id, "address": self.address, "amount": self.amount}

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> Balance:
        return cls(
            token_id=str(doc.get("tokenId") or ""),
            address=str(doc.get("address") or ""),
            amount=to_decimal(doc.get("amount"), Decimal(0)) or Decimal(0),
        )
