# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, etc.)."""

from coin_maker.persistence.repositories.interfaces import Document, IDocumentRepository
from coin_maker.persistence.repositories.in_memory import InMemoryDocumentRepository

__all__ = [
    "Document",
    "IDocumentRepository",
    "InMemoryDocumentRepository",
]
