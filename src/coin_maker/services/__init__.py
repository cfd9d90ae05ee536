"""Application services: token ledger, sales, transfers and history."""

from coin_maker.services.history import HistoryLog
from coin_maker.services.sales import ConfirmationResult, SaleEngine, SaleQuote
from coin_maker.services.token_ledger import TokenLedger
from coin_maker.services.transfer import TransferHandler

__all__ = [
    "ConfirmationResult",
    "HistoryLog",
    "SaleEngine",
    "SaleQuote",
    "TokenLedger",
    "TransferHandler",
]
