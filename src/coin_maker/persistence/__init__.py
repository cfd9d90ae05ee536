"""Persistence layer (repositories, collection names)."""

from coin_maker.persistence.collection_names import BALANCES, HISTORY, SALES, TOKENS
from coin_maker.persistence.repositories import (
    Document,
    IDocumentRepository,
    InMemoryDocumentRepository,
)

__all__ = [
    "BALANCES",
    "HISTORY",
    "SALES",
    "TOKENS",
    "Document",
    "IDocumentRepository",
    "InMemoryDocumentRepository",
]
