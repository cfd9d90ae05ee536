"""TON Center v2 API client."""

from coin_maker.clients.toncenter.schema import (
    ApiResponseSchema,
    MessageSchema,
    TransactionSchema,
)
from coin_maker.clients.toncenter.toncenter import TonCenterClient

__all__ = [
    "ApiResponseSchema",
    "MessageSchema",
    "TonCenterClient",
    "TransactionSchema",
]
