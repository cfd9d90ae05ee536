"""Custom exceptions for the marketplace, its store and the chain client.

Every error carries a stable ``code`` string that the HTTP layer returns
verbatim so clients can branch on it.
"""

from __future__ import annotations


class CoinMakerError(Exception):
    """Base exception for marketplace errors."""

    code: str = "server_error"

    def __init__(self, message: str | None = None, *, code: str | None = None) -> None:
        super().__init__(message or self.__class__.code)
        if code is not None:
            self.code = code


class MissingRequiredConfigError(CoinMakerError):
    """Raised when a required configuration value is missing."""

    code = "missing_config"


class ValidationError(CoinMakerError):
    """Missing or malformed input."""

    code = "missing"


class NotFoundError(CoinMakerError):
    """A referenced token or sale does not exist."""

    code = "not_found"


class TokenNotFoundError(NotFoundError):
    code = "token_not_found"

    def __init__(self, token_id: str) -> None:
        super().__init__(f"Token not found: {token_id}")
        self.token_id = token_id


class SaleNotFoundError(NotFoundError):
    code = "sale_not_found"

    def __init__(self, sale_id: str) -> None:
        super().__init__(f"Sale not found: {sale_id}")
        self.sale_id = sale_id


class InvalidAmountError(CoinMakerError):
    """Amount is zero, negative or not a number."""

    code = "bad_amount"


class InsufficientSupplyError(CoinMakerError):
    """Listing token does not have enough remaining supply for the purchase."""

    code = "not_enough_supply"

    def __init__(self, requested: object, remaining: object) -> None:
        super().__init__(f"Requested {requested} tokens, only {remaining} remaining")
        self.requested = requested
        self.remaining = remaining


class InsufficientBalanceError(CoinMakerError):
    """Sender balance is lower than the transfer amount."""

    code = "insufficient"

    def __init__(self, requested: object, available: object) -> None:
        super().__init__(f"Requested {requested}, available balance {available}")
        self.requested = requested
        self.available = available


class DocumentNotFoundError(CoinMakerError):
    """Raised by the document store when updating a document that does not exist."""

    code = "document_not_found"

    def __init__(self, collection: str, doc_id: str) -> None:
        super().__init__(f"No document {collection}/{doc_id}")
        self.collection = collection
        self.doc_id = doc_id


class ChainUnavailableError(CoinMakerError):
    """The transaction index could not be queried (network, timeout, ok=false)."""

    code = "chain_unavailable"


class ChainApiError(ChainUnavailableError):
    """Raised when a chain API request fails after retries."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause

