"""Repository layer - document store access and the account repository."""

from fintrack.repositories.protocols import DocumentStore, WriteBatch
from fintrack.repositories.locks import OwnerLockRegistry, get_owner_locks
from fintrack.repositories.account_repo import AccountRepository

__all__ = [
    "DocumentStore",
    "WriteBatch",
    "OwnerLockRegistry",
    "get_owner_locks",
    "AccountRepository",
]
