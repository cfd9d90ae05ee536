# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/, etc."""

from coin_maker.persistence.repositories.interfaces.document_repository import (
    Document,
    IDocumentRepository,
)

__all__ = ["Document", "IDocumentRepository"]
