"""Repository protocol definitions (interfaces)."""

from fintrack.repositories.protocols.document_store import (
    SERVER_TIMESTAMP,
    Document,
    DocumentNotFoundError,
    DocumentStore,
    DocumentStoreError,
    StoreConnectionError,
    WriteBatch,
    new_doc_id,
    resolve_server_timestamps,
)

__all__ = [
    "SERVER_TIMESTAMP",
    "Document",
    "DocumentNotFoundError",
    "DocumentStore",
    "DocumentStoreError",
    "StoreConnectionError",
    "WriteBatch",
    "new_doc_id",
    "resolve_server_timestamps",
]
