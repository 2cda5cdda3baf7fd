"""Account repository over a document store.

Sole mediator between validated account input and the store. Maintains the
single-default invariant and the zero-balance deletion guard, and converts
store failures into the coarse error kinds the API renders.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterator, Optional

from fintrack.core.exceptions import (
    BalanceNotZeroError,
    NotFoundError,
    OperationFailedError,
    StoreUnavailableError,
    UnauthorizedError,
    ValidationError,
)
from fintrack.core.timezone import parse_timestamp
from fintrack.domain.models import Account, AccountType
from fintrack.domain.validation import AccountCreate, AccountUpdate
from fintrack.repositories.locks import OwnerLockRegistry, get_owner_locks
from fintrack.repositories.protocols.document_store import (
    SERVER_TIMESTAMP,
    Document,
    DocumentStore,
    DocumentStoreError,
    StoreConnectionError,
    WriteBatch,
)

logger = logging.getLogger(__name__)

ACCOUNTS_COLLECTION = "accounts"

# Sorts records without a creation time after every dated record
_OLDEST = datetime.min


class AccountRepository:
    """Document-store-backed account persistence with owner-scoped invariants."""

    def __init__(
        self,
        store: DocumentStore,
        locks: Optional[OwnerLockRegistry] = None,
        collection: str = ACCOUNTS_COLLECTION,
    ):
        self._store = store
        self._locks = locks if locks is not None else get_owner_locks()
        self._collection = collection

    def list_active(self, owner_id: str) -> list[Account]:
        """List the owner's active accounts, newest first."""
        self._require_owner(owner_id)
        with self._store_errors("list_accounts"):
            accounts = self._fetch_active(owner_id)
        return accounts

    def get_by_id(self, account_id: str, owner_id: str) -> Account:
        """
        Fetch one account owned by ``owner_id``.

        Raises:
            NotFoundError: No account with this id exists.
            UnauthorizedError: The account belongs to another owner.
        """
        with self._store_errors("get_account"):
            return self._fetch_owned(account_id, owner_id)

    def create(self, owner_id: str, data: AccountCreate) -> str:
        """
        Create an account and return its id.

        When the new account is the default, any current default is demoted
        in the same batch as the insert.
        """
        self._require_owner(owner_id)
        with self._locks.hold(owner_id), self._store_errors("create_account"):
            batch = self._store.batch()

            if data.is_default:
                try:
                    existing = self._fetch_active(owner_id)
                except DocumentStoreError as exc:
                    logger.info(
                        "No existing accounts found for %s, creating first account (%s)",
                        owner_id,
                        exc,
                    )
                    existing = []
                self._stage_demotions(batch, existing, keep_id=None)

            account_id = batch.insert(
                self._collection,
                {
                    "owner_id": owner_id,
                    "name": data.name,
                    "account_type": data.account_type.value,
                    "balance": str(data.balance),
                    "is_default": data.is_default,
                    "is_active": True,
                    "created_at": SERVER_TIMESTAMP,
                    "updated_at": SERVER_TIMESTAMP,
                    "last_updated": SERVER_TIMESTAMP,
                },
            )
            batch.commit()

        logger.info("Created account %s for %s", account_id, owner_id)
        return account_id

    def update(self, account_id: str, owner_id: str, data: AccountUpdate) -> None:
        """
        Apply a partial update to an active account owned by ``owner_id``.

        Making the account default demotes every other default in the same
        batch.
        """
        with self._locks.hold(owner_id), self._store_errors("update_account"):
            account = self._fetch_owned(account_id, owner_id)
            if not account.is_active:
                raise NotFoundError("Account", account_id)

            batch = self._store.batch()
            if data.is_default:
                existing = self._fetch_active(owner_id)
                self._stage_demotions(batch, existing, keep_id=account_id)

            changes: dict[str, Any] = {
                "updated_at": SERVER_TIMESTAMP,
                "last_updated": SERVER_TIMESTAMP,
            }
            if data.name is not None:
                changes["name"] = data.name
            if data.account_type is not None:
                changes["account_type"] = data.account_type.value
            if data.balance is not None:
                changes["balance"] = str(data.balance)
            if data.is_default is not None:
                changes["is_default"] = data.is_default

            batch.update(self._collection, account_id, changes)
            batch.commit()

    def soft_delete(self, account_id: str, owner_id: str) -> None:
        """
        Mark an account inactive (the record is retained).

        Raises:
            BalanceNotZeroError: The account still carries a balance.
        """
        with self._locks.hold(owner_id), self._store_errors("delete_account"):
            account = self._fetch_owned(account_id, owner_id)
            if not account.is_active:
                return  # Already deleted
            if not account.has_zero_balance:
                raise BalanceNotZeroError(account_id, account.balance)

            self._store.update(
                self._collection,
                account_id,
                {
                    "is_active": False,
                    "is_default": False,
                    "updated_at": SERVER_TIMESTAMP,
                },
            )
        logger.info("Soft-deleted account %s for %s", account_id, owner_id)

    def set_default(self, account_id: str, owner_id: str) -> None:
        """Make ``account_id`` the owner's only default account."""
        with self._locks.hold(owner_id), self._store_errors("set_default_account"):
            account = self._fetch_owned(account_id, owner_id)
            if not account.is_active:
                raise NotFoundError("Account", account_id)

            batch = self._store.batch()
            for existing in self._fetch_active(owner_id):
                batch.update(
                    self._collection,
                    existing.account_id,
                    {
                        "is_default": existing.account_id == account_id,
                        "updated_at": SERVER_TIMESTAMP,
                    },
                )
            batch.commit()

    def _fetch_owned(self, account_id: str, owner_id: str) -> Account:
        doc = self._store.get(self._collection, account_id)
        if doc is None:
            raise NotFoundError("Account", account_id)
        if doc.data.get("owner_id") != owner_id:
            raise UnauthorizedError("Account", account_id)
        return self._to_domain(doc)

    def _fetch_active(self, owner_id: str) -> list[Account]:
        docs = self._store.query(
            self._collection,
            {"owner_id": owner_id, "is_active": True},
        )
        accounts = [self._to_domain(doc) for doc in docs]
        accounts.sort(key=self._created_sort_key, reverse=True)
        return accounts

    def _stage_demotions(
        self,
        batch: WriteBatch,
        accounts: list[Account],
        keep_id: Optional[str],
    ) -> None:
        for account in accounts:
            if account.is_default and account.account_id != keep_id:
                batch.update(
                    self._collection,
                    account.account_id,
                    {"is_default": False, "updated_at": SERVER_TIMESTAMP},
                )

    @contextmanager
    def _store_errors(self, operation: str) -> Iterator[None]:
        """Re-signal store failures as coarse errors tagged with the operation."""
        try:
            yield
        except StoreConnectionError as exc:
            logger.error("Store unavailable during %s: %s", operation, exc)
            raise StoreUnavailableError(operation, cause=exc) from exc
        except DocumentStoreError as exc:
            logger.exception("Store failure during %s", operation)
            raise OperationFailedError(operation, cause=exc) from exc

    @staticmethod
    def _require_owner(owner_id: str) -> None:
        if not owner_id:
            raise ValidationError({"owner_id": "User ID is required"})

    @staticmethod
    def _created_sort_key(account: Account) -> datetime:
        if account.created_at is None:
            return _OLDEST
        return account.created_at.replace(tzinfo=None)

    @staticmethod
    def _to_domain(doc: Document) -> Account:
        """Convert a stored document to the domain model."""
        data = doc.data
        return Account(
            account_id=doc.doc_id,
            owner_id=data["owner_id"],
            name=data["name"],
            account_type=AccountType(data["account_type"]),
            balance=Decimal(str(data.get("balance", "0"))),
            is_default=bool(data.get("is_default", False)),
            is_active=bool(data.get("is_active", True)),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
            last_updated=parse_timestamp(data.get("last_updated")),
        )
