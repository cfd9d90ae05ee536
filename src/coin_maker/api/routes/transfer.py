"""Balance transfer endpoint."""

from fastapi import APIRouter, Depends

from coin_maker.api.dependencies import get_transfer_handler
from coin_maker.api.schemas import OkResponse, TransferRequest
from coin_maker.services.transfer import TransferHandler

router = APIRouter(tags=["Balances"])


@router.post("/transfer", response_model=OkResponse)
async def transfer(
    body: TransferRequest,
    handler: TransferHandler = Depends(get_transfer_handler),
) -> OkResponse:
    await handler.transfer(body.token_id, body.from_address, body.to_address, body.amount)
    return OkResponse()
