"""Coin Maker: token marketplace backend with on-chain payment confirmation."""

from coin_maker.config import get_settings
from coin_maker.DI import Container
from coin_maker.services import SaleEngine, TokenLedger, TransferHandler

__version__ = "0.0.1"
__all__ = [
    "Container",
    "SaleEngine",
    "TokenLedger",
    "TransferHandler",
    "get_settings",
]
