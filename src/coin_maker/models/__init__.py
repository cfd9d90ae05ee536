# -*- coding: utf-8 -*-
"""Domain models."""

from coin_maker.models.balance import Balance, balance_doc_id
from coin_maker.models.history_entry import HistoryEntry, HistoryType
from coin_maker.models.sale import Sale, SaleStatus
from coin_maker.models.token import Token, TokenType

__all__ = [
    "Balance",
    "HistoryEntry",
    "HistoryType",
    "Sale",
    "SaleStatus",
    "Token",
    "TokenType",
    "balance_doc_id",
]
