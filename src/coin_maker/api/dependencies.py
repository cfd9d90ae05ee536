"""FastAPI dependencies resolving services from the application container."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from coin_maker.services.history import HistoryLog
from coin_maker.services.sales import SaleEngine
from coin_maker.services.token_ledger import TokenLedger
from coin_maker.services.transfer import TransferHandler

if TYPE_CHECKING:
    from coin_maker.DI import Container


def get_container(request: Request) -> "Container":
    return request.app.state.container


def get_token_ledger(request: Request) -> TokenLedger:
    return get_container(request).token_ledger()


def get_sale_engine(request: Request) -> SaleEngine:
    return get_container(request).sale_engine()


def get_transfer_handler(request: Request) -> TransferHandler:
    return get_container(request).transfer_handler()


def get_history_log(request: Request) -> HistoryLog:
    return get_container(request).history_log()
