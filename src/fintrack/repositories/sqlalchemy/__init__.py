"""SQLAlchemy repository implementations."""

from fintrack.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from fintrack.repositories.sqlalchemy.document_store import (
    SqlAlchemyDocumentStore,
    SqlAlchemyWriteBatch,
)

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyDocumentStore",
    "SqlAlchemyWriteBatch",
]
