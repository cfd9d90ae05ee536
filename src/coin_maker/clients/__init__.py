"""HTTP and chain clients."""

from coin_maker.clients.chain import ChainTransaction, IChainQueryClient
from coin_maker.clients.http import AsyncHttpClient
from coin_maker.clients.toncenter import TonCenterClient

__all__ = [
    "AsyncHttpClient",
    "ChainTransaction",
    "IChainQueryClient",
    "TonCenterClient",
]
