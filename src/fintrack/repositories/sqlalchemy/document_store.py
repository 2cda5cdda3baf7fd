"""SQLAlchemy implementation of DocumentStore.

Documents are rows of a single ``documents`` table keyed by
(collection, doc_id) with a JSON payload. Equality filters are applied in
Python over a collection's rows, which is plenty for per-user account lists.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from fintrack.core.timezone import format_timestamp, now_utc
from fintrack.repositories.protocols.document_store import (
    Document,
    DocumentNotFoundError,
    DocumentStoreError,
    StoreConnectionError,
    new_doc_id,
    resolve_server_timestamps,
)
from fintrack.repositories.sqlalchemy.orm_models import DocumentORM

logger = logging.getLogger(__name__)


class SqlAlchemyWriteBatch:
    """Write batch committed as a single database transaction."""

    def __init__(self, store: "SqlAlchemyDocumentStore"):
        self._store = store
        self._ops: list[tuple[str, str, str, dict[str, Any]]] = []
        self._committed = False

    def insert(self, collection: str, data: Mapping[str, Any]) -> str:
        """Stage a new document; returns the id it will be stored under."""
        doc_id = new_doc_id()
        self._ops.append(("insert", collection, doc_id, dict(data)))
        return doc_id

    def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """Stage a partial update of an existing document."""
        self._ops.append(("update", collection, doc_id, dict(data)))

    def commit(self) -> None:
        """Apply every staged write; nothing is written if any write fails."""
        if self._committed:
            raise DocumentStoreError("Write batch already committed")
        self._store._apply(self._ops)
        self._committed = True


class SqlAlchemyDocumentStore:
    """SQLAlchemy-backed document store."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = now_utc):
        self._db = db
        self._clock = clock

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Retrieve a document by id."""
        try:
            row = self._get_row(collection, doc_id)
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise self._translate(exc) from exc
        return self._to_document(row) if row else None

    def query(self, collection: str, filters: Mapping[str, Any]) -> list[Document]:
        """Return documents whose fields equal every filter value."""
        try:
            rows = (
                self._db.query(DocumentORM)
                .filter(DocumentORM.collection == collection)
                .all()
            )
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise self._translate(exc) from exc
        return [
            self._to_document(row)
            for row in rows
            if all(row.data.get(key) == value for key, value in filters.items())
        ]

    def insert(self, collection: str, data: Mapping[str, Any]) -> str:
        """Persist a new document and return its id."""
        doc_id = new_doc_id()
        self._apply([("insert", collection, doc_id, dict(data))])
        return doc_id

    def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """Merge fields into an existing document."""
        self._apply([("update", collection, doc_id, dict(data))])

    def batch(self) -> SqlAlchemyWriteBatch:
        """Start an atomic write batch."""
        return SqlAlchemyWriteBatch(self)

    def _apply(self, ops: list[tuple[str, str, str, dict[str, Any]]]) -> None:
        """Apply writes in one transaction, rolling back on any failure."""
        now = self._clock()
        stamp = format_timestamp(now)
        try:
            for op, collection, doc_id, data in ops:
                fields = resolve_server_timestamps(data, stamp)
                if op == "insert":
                    fields.setdefault("created_at", stamp)
                    fields.setdefault("updated_at", stamp)
                    self._db.add(
                        DocumentORM(
                            collection=collection,
                            doc_id=doc_id,
                            data=fields,
                            created_at=now,
                            updated_at=now,
                        )
                    )
                else:
                    row = self._get_row(collection, doc_id)
                    if row is None:
                        raise DocumentNotFoundError(collection, doc_id)
                    # Reassign so the JSON column registers the change
                    row.data = {**row.data, **fields}
                    row.updated_at = now
            self._db.commit()
        except DocumentStoreError:
            self._db.rollback()
            raise
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise self._translate(exc) from exc

    def _get_row(self, collection: str, doc_id: str) -> Optional[DocumentORM]:
        return self._db.query(DocumentORM).filter(
            DocumentORM.collection == collection,
            DocumentORM.doc_id == doc_id,
        ).first()

    @staticmethod
    def _translate(exc: SQLAlchemyError) -> DocumentStoreError:
        if isinstance(exc, (OperationalError, InterfaceError)):
            logger.warning("Database unreachable: %s", exc)
            return StoreConnectionError(str(exc))
        return DocumentStoreError(str(exc))

    @staticmethod
    def _to_document(orm: DocumentORM) -> Document:
        """Convert ORM row to a detached document."""
        return Document(doc_id=orm.doc_id, data=dict(orm.data))
