"""Dependency injection for FastAPI."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from fintrack.config.settings import get_settings
from fintrack.core.exceptions import NotAuthenticatedError
from fintrack.domain.models import User
from fintrack.providers import HeaderIdentityProvider, IdentityProvider
from fintrack.repositories.account_repo import AccountRepository
from fintrack.repositories.locks import get_owner_locks
from fintrack.repositories.protocols import DocumentStore
from fintrack.repositories.sqlalchemy import SqlAlchemyDocumentStore, get_db
from fintrack.services import AccountService


def get_document_store(db: Session = Depends(get_db)) -> DocumentStore:
    """Provide DocumentStore instance."""
    return SqlAlchemyDocumentStore(db)


def get_account_repo(
    store: DocumentStore = Depends(get_document_store),
) -> AccountRepository:
    """Provide AccountRepository instance sharing the process-wide owner locks."""
    return AccountRepository(
        store=store,
        locks=get_owner_locks(),
        collection=get_settings().accounts_collection,
    )


def get_account_service(
    account_repo: AccountRepository = Depends(get_account_repo),
) -> AccountService:
    """Provide AccountService instance."""
    return AccountService(account_repo=account_repo)


def get_identity_provider() -> IdentityProvider:
    """Provide IdentityProvider instance."""
    return HeaderIdentityProvider()


def get_current_user(
    request: Request,
    provider: IdentityProvider = Depends(get_identity_provider),
) -> User:
    """Resolve the signed-in user; anonymous requests are rejected."""
    user = provider.current_user(request.headers)
    if user is None:
        raise NotAuthenticatedError()
    return user
