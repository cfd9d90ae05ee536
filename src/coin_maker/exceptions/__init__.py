"""Exceptions subpackage."""

from coin_maker.exceptions.exceptions import (
    ChainApiError,
    ChainUnavailableError,
    CoinMakerError,
    DocumentNotFoundError,
    InsufficientBalanceError,
    InsufficientSupplyError,
    InvalidAmountError,
    MissingRequiredConfigError,
    NotFoundError,
    SaleNotFoundError,
    TokenNotFoundError,
    ValidationError,
)

__all__ = [
    "ChainApiError",
    "ChainUnavailableError",
    "CoinMakerError",
    "DocumentNotFoundError",
    "InsufficientBalanceError",
    "InsufficientSupplyError",
    "InvalidAmountError",
    "MissingRequiredConfigError",
    "NotFoundError",
    "SaleNotFoundError",
    "TokenNotFoundError",
    "ValidationError",
]
