"""Token endpoints: list, mint and quote a purchase."""

from typing import List

from fastapi import APIRouter, Depends

from coin_maker.api.dependencies import get_sale_engine, get_token_ledger
from coin_maker.api.schemas import (
    BuyRequest,
    BuyResponse,
    CreateTokenRequest,
    CreateTokenResponse,
    TokenSchema,
)
from coin_maker.services.sales import SaleEngine
from coin_maker.services.token_ledger import TokenLedger

router = APIRouter(prefix="/tokens", tags=["Tokens"])


@router.get(
    "",
    response_model=List[TokenSchema],
    response_model_exclude_none=True,
)
async def list_tokens(ledger: TokenLedger = Depends(get_token_ledger)) -> List[TokenSchema]:
    """All tokens, newest first."""
    tokens = await ledger.list_tokens()
    return [TokenSchema.from_token(t) for t in tokens]


@router.post(
    "/create",
    response_model=CreateTokenResponse,
    response_model_exclude_none=True,
)
async def create_token(
    body: CreateTokenRequest,
    ledger: TokenLedger = Depends(get_token_ledger),
) -> CreateTokenResponse:
    """Mint a listing or user token."""
    token = await ledger.create_token(
        type=body.type,
        name=body.name,
        ticker=body.ticker,
        owner=body.owner,
        total_supply=body.total_supply,
        price_per_token=body.price_per_token,
        dynamic_price=body.dynamic_price,
    )
    return CreateTokenResponse(id=token.id, token=TokenSchema.from_token(token))


@router.post("/{token_id}/buy", response_model=BuyResponse)
async def buy_token(
    token_id: str,
    body: BuyRequest,
    engine: SaleEngine = Depends(get_sale_engine),
) -> BuyResponse:
    """Quote a purchase. The buyer then pays cost to receiver and confirms the sale."""
    quote = await engine.create_sale(token_id, body.buyer, body.amount_tokens)
    return BuyResponse(sale_id=quote.sale_id, cost=quote.cost, receiver=quote.receiver)
