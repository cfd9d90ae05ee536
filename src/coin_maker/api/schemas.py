"""Request and response bodies of the HTTP API (camelCase on the wire)."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from coin_maker.models.token import Token
from coin_maker.services.sales.dto import ConfirmationResult

JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
"""Decimal inside the service, JSON number on the wire."""


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
# Fields are optional so that missing values reach the services, which
# raise ValidationError with the matching error code.


class CreateTokenRequest(CamelModel):
    type: Optional[str] = None
    name: Optional[str] = None
    ticker: Optional[str] = None
    owner: Optional[str] = None
    total_supply: Optional[Decimal] = None
    price_per_token: Optional[Decimal] = None
    dynamic_price: Optional[Decimal] = None


class BuyRequest(CamelModel):
    buyer: Optional[str] = None
    amount_tokens: Optional[Decimal] = None


class ConfirmRequest(CamelModel):
    tx_hash: Optional[str] = None


class TransferRequest(CamelModel):
    token_id: Optional[str] = None
    from_address: Optional[str] = Field(default=None, alias="from")
    to_address: Optional[str] = Field(default=None, alias="to")
    amount: Optional[Decimal] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class HealthResponse(CamelModel):
    ok: bool = True
    ts: int


class TokenSchema(CamelModel):
    id: str
    type: str
    name: str
    ticker: str
    owner: str
    created_at: int
    """Epoch milliseconds."""
    total_supply: Optional[JsonDecimal] = None
    remaining_supply: Optional[JsonDecimal] = None
    price_per_token: Optional[JsonDecimal] = None
    dynamic_price: Optional[JsonDecimal] = None
    supply_issued: Optional[JsonDecimal] = None

    @classmethod
    def from_token(cls, token: Token) -> TokenSchema:
        return cls.model_validate(token.to_document())


class CreateTokenResponse(CamelModel):
    ok: bool = True
    id: str
    token: TokenSchema


class BuyResponse(CamelModel):
    ok: bool = True
    sale_id: str
    cost: JsonDecimal
    receiver: str


class ConfirmResponse(CamelModel):
    ok: bool
    message: Optional[str] = None
    reason: Optional[str] = None
    tx_hash: Optional[str] = None
    found_amount: Optional[JsonDecimal] = None
    sender: Optional[str] = None

    @classmethod
    def from_result(cls, result: ConfirmationResult) -> ConfirmResponse:
        return cls(
            ok=result.ok,
            message=result.message,
            reason=result.reason,
            tx_hash=result.tx_hash,
            found_amount=result.found_amount,
            sender=result.sender,
        )


class OkResponse(CamelModel):
    ok: bool = True


class BalanceSchema(CamelModel):
    token_id: str
    address: str
    amount: JsonDecimal


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
    detail: Optional[Any] = None
