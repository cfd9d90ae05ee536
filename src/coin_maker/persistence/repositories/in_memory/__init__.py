"""In-memory repository implementations."""

from coin_maker.persistence.repositories.in_memory.document_repository import (
    InMemoryDocumentRepository,
)

__all__ = ["InMemoryDocumentRepository"]
