# -*- coding: utf-8 -*-
"""Abstract interface for a keyed JSON-like document store (in-memory, Firestore, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional

Document = dict[str, Any]


class IDocumentRepository(ABC):
    """Interface for documents grouped in named collections and addressed by id.

    No cross-document transactions: each call reads or writes one document
    (or runs one query).
    """

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return a copy of the document, or None if missing."""
        ...

    @abstractmethod
    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """Create or replace the document."""
        ...

    @abstractmethod
    async def update(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> None:
        """Merge fields into an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """
        ...

    @abstractmethod
    async def query(
        self,
        collection: str,
        *,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[Document]:
        """Return documents whose fields equal every (field, value) in where.

        Ordered by order_by when given, else in the store's natural order.
        """
        ...
