# -*- coding: utf-8 -*-
"""Sale engine: quotes purchases and confirms them against on-chain payments.

Confirmation state machine over Sale.status:

- CONFIRMED: idempotent success, nothing is written.
- PENDING / PENDING_CHECK:
  1. Direct-hash path (tx_hash given): look the transaction up. A match
     finalizes; a mismatch is reported and the sale stays open; a lookup
     failure falls through to the scan.
  2. Scan path: recent transactions of the seller address within the scan
     window; the first one whose value covers the cost wins. Nothing found
     or chain unavailable marks the sale PENDING_CHECK.
  3. Finalize: sale CONFIRMED, purchase applied to the token, buyer
     credited, buy_confirmed recorded. These writes are sequential and not
     atomic: a failure after the first leaves the sale confirmed with a
     partial ledger update.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from decimal import Decimal
from typing import Any, Optional

import structlog
from structlog.contextvars import bound_contextvars

from coin_maker.clients.chain import ChainTransaction, IChainQueryClient
from coin_maker.exceptions import (
    ChainUnavailableError,
    InvalidAmountError,
    SaleNotFoundError,
    ValidationError,
)
from coin_maker.models.history_entry import HistoryType
from coin_maker.models.sale import Sale
from coin_maker.persistence.collection_names import SALES
from coin_maker.persistence.repositories.interfaces.document_repository import (
    IDocumentRepository,
)
from coin_maker.services.history.history_log import HistoryLog
from coin_maker.services.sales.dto import (
    ConfirmationResult,
    HashLookupResult,
    HashMatch,
    HashMismatch,
    LookupFailure,
    SaleQuote,
    ScanMatch,
)
from coin_maker.services.token_ledger.token_ledger import TokenLedger
from coin_maker.utils.ids import to_millis, utc_now
from coin_maker.utils.units import to_decimal
from coin_maker.utils.validation import mask_address, same_address


class SaleEngine:
    """Creates sales and confirms them against the chain index."""

    DEFAULT_EPSILON = Decimal("1e-7")
    DEFAULT_SCAN_LIMIT = 50
    DEFAULT_SCAN_WINDOW_SECONDS = 60 * 60 * 24

    def __init__(
        self,
        document_repository: IDocumentRepository,
        chain_client: IChainQueryClient,
        token_ledger: TokenLedger,
        history_log: HistoryLog,
        *,
        amount_epsilon: Decimal = DEFAULT_EPSILON,
        scan_limit: int = DEFAULT_SCAN_LIMIT,
        scan_window_seconds: int = DEFAULT_SCAN_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            document_repository: Document store holding sales (injected).
            chain_client: Transaction index (injected).
            token_ledger: Token and balance bookkeeping (injected).
            history_log: Event log (injected).
            amount_epsilon: Tolerance below cost still accepted as full payment.
            scan_limit: Recent seller transactions fetched by the scan path.
            scan_window_seconds: Maximum age of a transaction the scan accepts.
            clock: Returns current unix time in seconds.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._repo = document_repository
        self._chain = chain_client
        self._ledger = token_ledger
        self._history = history_log
        self._epsilon = Decimal(str(amount_epsilon))
        self._scan_limit = scan_limit
        self._scan_window = scan_window_seconds
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)

    # -------------------------------------------------------------------------
    # Quote
    # -------------------------------------------------------------------------

    async def create_sale(self, token_id: str, buyer: str | None, amount_tokens: Any) -> SaleQuote:
        """Create a PENDING sale for amount_tokens of token_id bought by buyer.

        Token supply and price are not touched until confirmation.

        Raises:
            ValidationError: buyer or amount missing.
            TokenNotFoundError: Unknown token.
            InvalidAmountError: amount_tokens <= 0 or not a number.
            InsufficientSupplyError: Listing token without enough remaining supply.
        """
        buyer = (buyer or "").strip()
        if not buyer or amount_tokens is None or amount_tokens == "":
            raise ValidationError("buyer and amountTokens are required")
        token = await self._ledger.get_token(token_id)
        amount = to_decimal(amount_tokens)
        if amount is None or amount <= 0:
            raise InvalidAmountError("amountTokens must be > 0")

        cost = self._ledger.quote_cost(token, amount)
        receiver = token.owner or self._ledger.platform_wallet
        sale = Sale.create(
            token_id=token.id,
            token_ticker=token.ticker,
            buyer=buyer,
            seller=receiver,
            amount_tokens=amount,
            cost=cost,
        )
        sale_doc = sale.to_document()
        await self._repo.set(SALES, sale.id, sale_doc)
        await self._history.record(
            HistoryType.SALE_CREATED,
            saleId=sale.id,
            **{k: v for k, v in sale_doc.items() if k != "id"},
        )
        self._logger.info(
            "sale_created",
            sale_id=sale.id,
            token_id=token.id,
            buyer_masked=mask_address(buyer),
            amount=float(amount),
            cost=float(cost),
        )
        return SaleQuote(sale_id=sale.id, cost=cost, receiver=receiver)

    async def get_sale(self, sale_id: str) -> Sale:
        """Raises SaleNotFoundError if missing."""
        doc = await self._repo.get(SALES, sale_id)
        if doc is None:
            raise SaleNotFoundError(sale_id)
        return Sale.from_document(sale_id, doc)

    # -------------------------------------------------------------------------
    # Confirmation
    # -------------------------------------------------------------------------

    async def confirm_sale(self, sale_id: str, tx_hash: Optional[str] = None) -> ConfirmationResult:
        """Try to confirm a sale from on-chain evidence.

        Raises:
            SaleNotFoundError: Unknown sale. Chain errors are never raised.
        """
        tx_hash = (tx_hash or "").strip() or None
        sale = await self.get_sale(sale_id)
        with bound_contextvars(sale_id=sale.id, token_id=sale.token_id):
            if sale.is_confirmed:
                self._logger.info("sale_already_confirmed")
                return ConfirmationResult.already_confirmed(sale.tx_hash)

            if tx_hash is not None:
                lookup = await self._lookup_hash(sale, tx_hash)
                if isinstance(lookup, HashMatch):
                    return await self._finalize(
                        sale,
                        lookup.tx_hash,
                        sender_verified=lookup.transaction.sender is not None,
                    )
                if isinstance(lookup, HashMismatch):
                    self._logger.info(
                        "sale_tx_mismatch",
                        tx_hash=tx_hash,
                        found_amount=float(lookup.transaction.value),
                        cost=float(sale.cost),
                        sender_masked=mask_address(lookup.transaction.sender),
                    )
                    return ConfirmationResult.failed(
                        "tx_mismatch",
                        found_amount=lookup.transaction.value,
                        sender=lookup.transaction.sender,
                    )
                self._logger.info(
                    "sale_tx_lookup_failed",
                    tx_hash=tx_hash,
                    cause=lookup.cause,
                    detail=lookup.detail,
                )

            try:
                transactions = await self._chain.get_transactions_for_address(
                    sale.seller,
                    limit=self._scan_limit,
                )
            except Exception as e:
                self._logger.warning(
                    "sale_scan_chain_unavailable",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                await self._mark_pending_check(sale)
                return ConfirmationResult.failed("txs_unavailable")

            match = self._scan(sale, transactions)
            if match is None:
                self._logger.info("sale_payment_not_found", scanned=len(transactions))
                await self._mark_pending_check(sale)
                return ConfirmationResult.failed("not_found")

            if not match.sender_verified:
                self._logger.warning(
                    "sale_matched_without_sender_verification",
                    tx_hash=match.transaction.hash,
                    sender_masked=mask_address(match.transaction.sender),
                    buyer_masked=mask_address(sale.buyer),
                )
            return await self._finalize(
                sale,
                match.transaction.hash,
                sender_verified=match.sender_verified,
            )

    def _covers_cost(self, sale: Sale, value: Decimal) -> bool:
        return value >= sale.cost - self._epsilon

    async def _lookup_hash(self, sale: Sale, tx_hash: str) -> HashLookupResult:
        """Direct-hash path: match, mismatch, or failure (which falls through to the scan)."""
        try:
            tx = await self._chain.get_transaction(tx_hash)
        except ChainUnavailableError as e:
            return LookupFailure(cause="unavailable", detail=str(e))
        except Exception as e:
            self._logger.warning(
                "sale_tx_lookup_error",
                tx_hash=tx_hash,
                error_type=type(e).__name__,
                error=str(e),
            )
            return LookupFailure(cause="unavailable", detail=str(e))
        if tx is None:
            return LookupFailure(cause="not_found")
        sender_ok = tx.sender is None or same_address(tx.sender, sale.buyer)
        if self._covers_cost(sale, tx.value) and sender_ok:
            return HashMatch(tx_hash=tx_hash, transaction=tx)
        return HashMismatch(transaction=tx)

    def _scan(self, sale: Sale, transactions: list[ChainTransaction]) -> ScanMatch | None:
        """Return the first recent transaction (in given order) whose value covers the cost.

        Sender mismatch or absence does not disqualify a transaction; it is
        only reflected in sender_verified.
        """
        now = int(self._clock())
        for tx in transactions:
            if tx.utime and now - tx.utime > self._scan_window:
                continue
            if not self._covers_cost(sale, tx.value):
                continue
            return ScanMatch(
                transaction=tx,
                sender_verified=tx.sender is not None and same_address(tx.sender, sale.buyer),
            )
        return None

    async def _mark_pending_check(self, sale: Sale) -> None:
        updated = sale.with_pending_check()
        await self._repo.update(SALES, sale.id, {"status": updated.status.value})

    async def _finalize(
        self,
        sale: Sale,
        tx_hash: Optional[str],
        *,
        sender_verified: bool,
    ) -> ConfirmationResult:
        """Confirm the sale and apply its economic side effects, in order."""
        confirmed_at = utc_now()
        confirmed = sale.with_confirmed(tx_hash, confirmed_at)
        await self._repo.update(
            SALES,
            sale.id,
            {
                "status": confirmed.status.value,
                "txHash": confirmed.tx_hash,
                "confirmedAt": to_millis(confirmed_at),
            },
        )
        await self._ledger.apply_purchase(sale.token_id, sale.amount_tokens)
        await self._ledger.credit(sale.token_id, sale.buyer, sale.amount_tokens)
        await self._history.record(
            HistoryType.BUY_CONFIRMED,
            saleId=sale.id,
            tokenId=sale.token_id,
            buyer=sale.buyer,
            seller=sale.seller,
            amount=sale.amount_tokens,
            cost=sale.cost,
            txHash=tx_hash,
            senderVerified=sender_verified,
        )
        self._logger.info(
            "sale_confirmed",
            tx_hash=tx_hash,
            buyer_masked=mask_address(sale.buyer),
            amount=float(sale.amount_tokens),
            cost=float(sale.cost),
            sender_verified=sender_verified,
        )
        return ConfirmationResult.confirmed(tx_hash)
