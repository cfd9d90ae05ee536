"""TransferHandler: moves token balances between addresses."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import structlog

from coin_maker.exceptions import InvalidAmountError, ValidationError
from coin_maker.models.history_entry import HistoryType
from coin_maker.services.history.history_log import HistoryLog
from coin_maker.services.token_ledger.token_ledger import TokenLedger
from coin_maker.utils.units import to_decimal
from coin_maker.utils.validation import mask_address


class TransferHandler:
    """Debit the sender, credit the receiver, record a transfer entry.

    The debit is checked before anything is written. The token itself is
    not looked up: a transfer only needs the sender to hold a balance.
    """

    def __init__(
        self,
        token_ledger: TokenLedger,
        history_log: HistoryLog,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._ledger = token_ledger
        self._history = history_log
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def transfer(
        self,
        token_id: str | None,
        from_address: str | None,
        to_address: str | None,
        amount: Any,
    ) -> Decimal:
        """Move amount of token_id from from_address to to_address.

        Returns:
            The transferred amount.

        Raises:
            ValidationError: A field is missing.
            InvalidAmountError: amount <= 0 or not a number.
            InsufficientBalanceError: Sender balance lower than amount.
        """
        token_id = (token_id or "").strip()
        from_address = (from_address or "").strip()
        to_address = (to_address or "").strip()
        if not token_id or not from_address or not to_address or amount is None or amount == "":
            raise ValidationError("tokenId, from, to and amount are required")
        value = to_decimal(amount)
        if value is None or value <= 0:
            raise InvalidAmountError("amount must be > 0")

        await self._ledger.debit(token_id, from_address, value)
        await self._ledger.credit(token_id, to_address, value)
        await self._history.record(
            HistoryType.TRANSFER,
            tokenId=token_id,
            **{"from": from_address, "to": to_address},
            amount=value,
        )
        self._logger.info(
            "transfer_completed",
            token_id=token_id,
            from_masked=mask_address(from_address),
            to_masked=mask_address(to_address),
            amount=float(value),
        )
        return value
