# -*- coding: utf-8 -*-
"""In-memory document repository (collection -> doc id -> document)."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Optional

from coin_maker.exceptions import DocumentNotFoundError
from coin_maker.persistence.repositories.interfaces.document_repository import (
    Document,
    IDocumentRepository,
)


class InMemoryDocumentRepository(IDocumentRepository):
    """In-memory implementation of IDocumentRepository.

    Stored documents and returned documents are deep copies, so callers never
    share mutable state with the store. Insertion order is the natural order.
    """

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[str, dict[str, Document]] = {}

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        doc = self._store.get(collection, {}).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        self._store.setdefault(collection, {})[doc_id] = copy.deepcopy(dict(data))

    async def update(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> None:
        docs = self._store.get(collection, {})
        if doc_id not in docs:
            raise DocumentNotFoundError(collection, doc_id)
        docs[doc_id].update(copy.deepcopy(dict(fields)))

    async def query(
        self,
        collection: str,
        *,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[Document]:
        conditions = dict(where or {})
        matched = [
            doc
            for doc in self._store.get(collection, {}).values()
            if all(doc.get(k) == v for k, v in conditions.items())
        ]
        if order_by is not None:
            # Mirrors Firestore: ordering by a field excludes documents without it
            matched = [d for d in matched if d.get(order_by) is not None]
            matched.sort(key=lambda d: d[order_by], reverse=descending)
        if limit is not None:
            matched = matched[: max(0, limit)]
        return [copy.deepcopy(d) for d in matched]
