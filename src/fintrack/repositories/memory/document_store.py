"""In-memory DocumentStore for offline use and tests."""

import copy
import threading
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from fintrack.core.timezone import format_timestamp, now_utc
from fintrack.repositories.protocols.document_store import (
    Document,
    DocumentNotFoundError,
    DocumentStoreError,
    new_doc_id,
    resolve_server_timestamps,
)


class InMemoryWriteBatch:
    """Write batch applied under the store lock."""

    def __init__(self, store: "InMemoryDocumentStore"):
        self._store = store
        self._ops: list[tuple[str, str, str, dict[str, Any]]] = []
        self._committed = False

    def insert(self, collection: str, data: Mapping[str, Any]) -> str:
        doc_id = new_doc_id()
        self._ops.append(("insert", collection, doc_id, dict(data)))
        return doc_id

    def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        self._ops.append(("update", collection, doc_id, dict(data)))

    def commit(self) -> None:
        if self._committed:
            raise DocumentStoreError("Write batch already committed")
        self._store._apply(self._ops)
        self._committed = True


class InMemoryDocumentStore:
    """
    Dict-backed document store.

    Thread-safe; documents are copied in and out so callers never share
    mutable state with the store.
    """

    def __init__(self, clock: Callable[[], datetime] = now_utc):
        self._clock = clock
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            data = self._collections.get(collection, {}).get(doc_id)
            if data is None:
                return None
            return Document(doc_id=doc_id, data=copy.deepcopy(data))

    def query(self, collection: str, filters: Mapping[str, Any]) -> list[Document]:
        with self._lock:
            docs = self._collections.get(collection, {})
            return [
                Document(doc_id=doc_id, data=copy.deepcopy(data))
                for doc_id, data in docs.items()
                if all(data.get(key) == value for key, value in filters.items())
            ]

    def insert(self, collection: str, data: Mapping[str, Any]) -> str:
        doc_id = new_doc_id()
        self._apply([("insert", collection, doc_id, dict(data))])
        return doc_id

    def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        self._apply([("update", collection, doc_id, dict(data))])

    def batch(self) -> InMemoryWriteBatch:
        return InMemoryWriteBatch(self)

    def _apply(self, ops: list[tuple[str, str, str, dict[str, Any]]]) -> None:
        stamp = format_timestamp(self._clock())
        with self._lock:
            # Check every target before touching anything
            for op, collection, doc_id, _ in ops:
                if op == "update" and doc_id not in self._collections.get(collection, {}):
                    raise DocumentNotFoundError(collection, doc_id)

            for op, collection, doc_id, data in ops:
                fields = copy.deepcopy(resolve_server_timestamps(data, stamp))
                docs = self._collections.setdefault(collection, {})
                if op == "insert":
                    fields.setdefault("created_at", stamp)
                    fields.setdefault("updated_at", stamp)
                    docs[doc_id] = fields
                else:
                    docs[doc_id].update(fields)
