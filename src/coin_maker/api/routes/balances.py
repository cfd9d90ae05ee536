"""Balance and history reads by address."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from coin_maker.api.dependencies import get_history_log, get_token_ledger
from coin_maker.api.schemas import BalanceSchema
from coin_maker.services.history import HistoryLog
from coin_maker.services.token_ledger import TokenLedger

router = APIRouter(tags=["Balances"])


@router.get("/balances/{address}", response_model=List[BalanceSchema])
async def list_balances(
    address: str,
    ledger: TokenLedger = Depends(get_token_ledger),
) -> List[BalanceSchema]:
    balances = await ledger.list_balances(address)
    return [
        BalanceSchema(token_id=b.token_id, address=b.address, amount=b.amount)
        for b in balances
    ]


@router.get("/history/{address}", response_model=None)
async def list_history(
    address: str,
    history: HistoryLog = Depends(get_history_log),
) -> List[Dict[str, Any]]:
    """History entries where address is the buyer. Entries are free-form event documents."""
    return await history.query_by_buyer(address)
