"""In-process repository implementations."""

from fintrack.repositories.memory.document_store import (
    InMemoryDocumentStore,
    InMemoryWriteBatch,
)

__all__ = [
    "InMemoryDocumentStore",
    "InMemoryWriteBatch",
]
