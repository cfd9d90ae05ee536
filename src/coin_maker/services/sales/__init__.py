"""Sale engine service (quotes and payment confirmation)."""

from coin_maker.services.sales.dto import (
    ConfirmationResult,
    HashLookupResult,
    HashMatch,
    HashMismatch,
    LookupFailure,
    SaleQuote,
    ScanMatch,
)
from coin_maker.services.sales.sale_engine import SaleEngine

__all__ = [
    "ConfirmationResult",
    "HashLookupResult",
    "HashMatch",
    "HashMismatch",
    "LookupFailure",
    "SaleEngine",
    "SaleQuote",
    "ScanMatch",
]
