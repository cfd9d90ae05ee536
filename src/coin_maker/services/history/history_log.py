"""History log: append-only event records in the history collection."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog

from coin_maker.models.history_entry import HistoryEntry, HistoryType
from coin_maker.persistence.collection_names import HISTORY
from coin_maker.persistence.repositories.interfaces.document_repository import (
    Document,
    IDocumentRepository,
)
from coin_maker.utils.validation import mask_address


class HistoryLog:
    """Writes sale/confirmation/transfer events and reads them back by buyer."""

    DEFAULT_QUERY_LIMIT = 100

    def __init__(
        self,
        document_repository: IDocumentRepository,
        *,
        query_limit: int = DEFAULT_QUERY_LIMIT,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the log.

        Args:
            document_repository: Document store (injected).
            query_limit: Maximum entries returned by query_by_buyer.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._repo = document_repository
        self._query_limit = query_limit
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def record(
        self,
        entry_type: HistoryType,
        *,
        when: datetime | None = None,
        **fields: Any,
    ) -> HistoryEntry:
        """Append one entry with a fresh id and timestamp. Entries are never updated."""
        entry = HistoryEntry.create(entry_type, fields, when=when)
        await self._repo.set(HISTORY, entry.id, entry.to_document())
        self._logger.debug("history_recorded", history_id=entry.id, history_type=entry.type.value)
        return entry

    async def query_by_buyer(self, address: str) -> list[Document]:
        """Return up to query_limit entries whose buyer is address, in store order.

        A failing query yields an empty list.
        """
        try:
            return await self._repo.query(
                HISTORY,
                where={"buyer": address},
                limit=self._query_limit,
            )
        except Exception as e:
            self._logger.warning(
                "history_query_failed",
                buyer_masked=mask_address(address),
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return []
