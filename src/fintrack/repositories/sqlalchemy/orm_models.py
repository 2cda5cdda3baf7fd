"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import Column, String, DateTime, JSON, Index

from fintrack.repositories.sqlalchemy.database import Base


class DocumentORM(Base):
    """A schemaless document stored as JSON within a named collection."""

    __tablename__ = "documents"

    collection = Column(String(64), primary_key=True)
    doc_id = Column(String(36), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)

    __table_args__ = (Index("ix_documents_collection", "collection"),)
