"""Sale confirmation endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from coin_maker.api.dependencies import get_sale_engine
from coin_maker.api.schemas import ConfirmRequest, ConfirmResponse
from coin_maker.services.sales import SaleEngine

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.post(
    "/{sale_id}/confirm",
    response_model=ConfirmResponse,
    response_model_exclude_none=True,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ConfirmResponse}},
)
async def confirm_sale(
    sale_id: str,
    body: Optional[ConfirmRequest] = None,
    engine: SaleEngine = Depends(get_sale_engine),
):
    """Confirm a sale from on-chain evidence.

    Chain-side failures answer 200 with ok=false; a transaction hash that
    does not pay the sale answers 400 (tx_mismatch).
    """
    result = await engine.confirm_sale(sale_id, body.tx_hash if body else None)
    response = ConfirmResponse.from_result(result)
    if result.reason == "tx_mismatch":
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=response.model_dump(
                mode="json",
                by_alias=True,
                include={"ok", "reason", "found_amount", "sender"},
            ),
        )
    return response
