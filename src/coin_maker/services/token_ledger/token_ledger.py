"""Token ledger: token definitions, purchase pricing and per-(token, address) balances."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import structlog

from coin_maker.exceptions import (
    InsufficientBalanceError,
    InsufficientSupplyError,
    InvalidAmountError,
    TokenNotFoundError,
    ValidationError,
)
from coin_maker.models.balance import Balance, balance_doc_id
from coin_maker.models.token import Token, TokenType
from coin_maker.persistence.collection_names import BALANCES, TOKENS
from coin_maker.persistence.repositories.interfaces.document_repository import (
    IDocumentRepository,
)
from coin_maker.utils.units import round_nano, to_decimal
from coin_maker.utils.validation import mask_address


def _positive(value: Any, field: str) -> Decimal | None:
    """Coerce an optional positive number. None/0 means absent; negative or garbage is invalid."""
    if value is None or value == "":
        return None
    d = to_decimal(value)
    if d is None:
        raise InvalidAmountError(f"{field} must be a number")
    if d == 0:
        return None
    if d < 0:
        raise InvalidAmountError(f"{field} must be > 0")
    return d


class TokenLedger:
    """Creates tokens, prices purchases, applies confirmed purchases and keeps balances.

    Balance updates are plain read-modify-write against the document store;
    concurrent writers to the same (token, address) can lose updates.
    """

    def __init__(
        self,
        document_repository: IDocumentRepository,
        *,
        platform_wallet: str,
        default_dynamic_price: Decimal = Decimal("0.1"),
        price_impact_alpha: Decimal = Decimal("0.005"),
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the ledger.

        Args:
            document_repository: Document store (injected).
            platform_wallet: Owner of tokens created without an owner.
            default_dynamic_price: Starting price of user tokens created without one.
            price_impact_alpha: Price increase per token bought on user tokens.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._repo = document_repository
        self._platform_wallet = platform_wallet
        self._default_dynamic_price = Decimal(str(default_dynamic_price))
        self._alpha = Decimal(str(price_impact_alpha))
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def platform_wallet(self) -> str:
        return self._platform_wallet

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    async def create_token(
        self,
        type: str | None,
        name: str | None,
        ticker: str | None,
        owner: str | None = None,
        total_supply: Any = None,
        price_per_token: Any = None,
        dynamic_price: Any = None,
    ) -> Token:
        """Create and persist a token.

        Any type other than "listing" creates a user token.

        Raises:
            ValidationError: type, name or ticker missing (code "missing"), or a
                listing without total_supply/price_per_token (code "listing_missing").
            InvalidAmountError: A supplied supply or price is negative or not a number.
        """
        if not type or not name or not ticker:
            raise ValidationError("type, name and ticker are required")
        owner = (owner or "").strip() or self._platform_wallet

        if type == TokenType.LISTING.value:
            supply = _positive(total_supply, "totalSupply")
            price = _positive(price_per_token, "pricePerToken")
            if supply is None or price is None:
                raise ValidationError(
                    "listing tokens require totalSupply and pricePerToken",
                    code="listing_missing",
                )
            token = Token.create_listing(name, ticker, owner, supply, price)
        else:
            start_price = _positive(dynamic_price, "dynamicPrice") or self._default_dynamic_price
            token = Token.create_user(name, ticker, owner, start_price)

        await self._repo.set(TOKENS, token.id, token.to_document())
        self._logger.info(
            "token_created",
            token_id=token.id,
            token_type=token.type.value,
            ticker=token.ticker,
            owner_masked=mask_address(token.owner),
        )
        return token

    async def get_token(self, token_id: str) -> Token:
        """Raises TokenNotFoundError if missing."""
        doc = await self._repo.get(TOKENS, token_id)
        if doc is None:
            raise TokenNotFoundError(token_id)
        return Token.from_document(token_id, doc)

    async def list_tokens(self) -> list[Token]:
        """All tokens, newest first."""
        docs = await self._repo.query(TOKENS, order_by="createdAt", descending=True)
        return [Token.from_document(str(d.get("id") or ""), d) for d in docs]

    def quote_cost(self, token: Token, amount_tokens: Decimal) -> Decimal:
        """Price of amount_tokens at the token's current price, rounded to 9 decimals.

        Raises:
            InsufficientSupplyError: Listing token with less remaining supply than requested.
        """
        if token.is_listing:
            remaining = token.remaining_supply or Decimal(0)
            if remaining < amount_tokens:
                raise InsufficientSupplyError(amount_tokens, remaining)
            return round_nano(amount_tokens * (token.price_per_token or Decimal(0)))
        price = token.dynamic_price or self._default_dynamic_price
        return round_nano(amount_tokens * price)

    async def apply_purchase(self, token_id: str, amount_tokens: Decimal) -> Token | None:
        """Apply a confirmed purchase to the token.

        Listing: remaining supply decreases by amount_tokens, floored at 0.
        User: supply issued increases by amount_tokens and the price is
        multiplied by (1 + alpha * amount_tokens), rounded to 9 decimals.

        Returns:
            The updated token, or None if the token no longer exists.
        """
        doc = await self._repo.get(TOKENS, token_id)
        if doc is None:
            self._logger.warning("apply_purchase_token_missing", token_id=token_id)
            return None
        token = Token.from_document(token_id, doc)

        if token.is_listing:
            remaining = max(Decimal(0), (token.remaining_supply or Decimal(0)) - amount_tokens)
            updated = token.with_remaining_supply(remaining)
            await self._repo.update(TOKENS, token_id, {"remainingSupply": remaining})
            self._logger.info(
                "listing_supply_reduced",
                token_id=token_id,
                amount=float(amount_tokens),
                remaining_supply=float(remaining),
            )
            return updated

        old_price = token.dynamic_price or self._default_dynamic_price
        issued = (token.supply_issued or Decimal(0)) + amount_tokens
        new_price = round_nano(old_price * (1 + self._alpha * amount_tokens))
        updated = token.with_price_update(new_price, issued)
        await self._repo.update(
            TOKENS,
            token_id,
            {"supplyIssued": issued, "dynamicPrice": new_price},
        )
        self._logger.info(
            "user_token_price_updated",
            token_id=token_id,
            amount=float(amount_tokens),
            old_price=float(old_price),
            new_price=float(new_price),
            supply_issued=float(issued),
        )
        return updated

    # -------------------------------------------------------------------------
    # Balances
    # -------------------------------------------------------------------------

    async def get_balance(self, token_id: str, address: str) -> Decimal:
        """Balance of address in token_id; 0 when no record exists."""
        doc = await self._repo.get(BALANCES, balance_doc_id(token_id, address))
        if doc is None:
            return Decimal(0)
        return Balance.from_document(doc).amount

    async def credit(self, token_id: str, address: str, amount: Decimal) -> Balance:
        """Add amount to the balance, creating the record if absent."""
        previous = await self.get_balance(token_id, address)
        balance = Balance(token_id=token_id, address=address, amount=previous + amount)
        await self._repo.set(BALANCES, balance.doc_id, balance.to_document())
        return balance

    async def debit(self, token_id: str, address: str, amount: Decimal) -> Balance:
        """Subtract amount from the balance.

        Raises:
            InsufficientBalanceError: If the balance is lower than amount (nothing is written).
        """
        have = await self.get_balance(token_id, address)
        if have < amount:
            raise InsufficientBalanceError(amount, have)
        balance = Balance(token_id=token_id, address=address, amount=have - amount)
        await self._repo.set(BALANCES, balance.doc_id, balance.to_document())
        return balance

    async def list_balances(self, address: str) -> list[Balance]:
        """All balance records of address."""
        docs = await self._repo.query(BALANCES, where={"address": address})
        return [Balance.from_document(d) for d in docs]
