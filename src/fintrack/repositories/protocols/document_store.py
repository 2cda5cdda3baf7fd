"""Document store protocol and shared store types."""

import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol


class _ServerTimestamp:
    """Sentinel replaced by the store's clock value at write time."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass
class Document:
    """A stored document: its id plus a JSON-compatible payload."""

    doc_id: str
    data: dict[str, Any] = field(default_factory=dict)


class DocumentStoreError(Exception):
    """Base exception for document store operations."""


class DocumentNotFoundError(DocumentStoreError):
    """Target document does not exist."""

    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"Document not found: {collection}/{doc_id}")


class StoreConnectionError(DocumentStoreError):
    """Could not reach the storage backend."""


class WriteBatch(Protocol):
    """Group of writes applied together or not at all."""

    def insert(self, collection: str, data: Mapping[str, Any]) -> str:
        """Stage a new document; returns the id it will be stored under."""
        ...

    def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """Stage a partial update of an existing document."""
        ...

    def commit(self) -> None:
        """Apply every staged write atomically."""
        ...


class DocumentStore(Protocol):
    """
    Interface for document storage.

    Documents live in named collections and are addressed by id. Fields set
    to ``SERVER_TIMESTAMP`` receive the store's write time; inserts always
    stamp ``created_at`` and ``updated_at``.
    """

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Retrieve a document by id."""
        ...

    def query(self, collection: str, filters: Mapping[str, Any]) -> list[Document]:
        """Return documents whose fields equal every filter value."""
        ...

    def insert(self, collection: str, data: Mapping[str, Any]) -> str:
        """Persist a new document and return its id."""
        ...

    def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """Merge fields into an existing document."""
        ...

    def batch(self) -> WriteBatch:
        """Start an atomic write batch."""
        ...


def new_doc_id() -> str:
    """Allocate a fresh document id."""
    return str(uuid.uuid4())


def resolve_server_timestamps(data: Mapping[str, Any], stamp: str) -> dict[str, Any]:
    """Return a copy of ``data`` with ``SERVER_TIMESTAMP`` fields set to ``stamp``."""
    return {
        key: (stamp if value is SERVER_TIMESTAMP else value)
        for key, value in data.items()
    }
