"""Account service: validation followed by repository calls."""

from typing import Any, Mapping, Optional

from fintrack.domain.models import Account
from fintrack.domain.validation import validate_create, validate_update
from fintrack.repositories.account_repo import AccountRepository


class AccountService:
    """
    Entry point for the presentation layer.

    Form input is validated before any store call; every failing field is
    reported in one ``ValidationError``. Mutations return the re-fetched
    account so callers render fresh state.
    """

    def __init__(self, account_repo: AccountRepository):
        self._account_repo = account_repo

    def list_accounts(self, owner_id: str) -> list[Account]:
        """List the owner's active accounts, newest first."""
        return self._account_repo.list_active(owner_id)

    def get_account(self, account_id: str, owner_id: str) -> Account:
        """Get an account by ID."""
        return self._account_repo.get_by_id(account_id, owner_id)

    def get_default_account(self, owner_id: str) -> Optional[Account]:
        """Return the owner's default account, if one is marked."""
        for account in self._account_repo.list_active(owner_id):
            if account.is_default:
                return account
        return None

    def create_account(self, owner_id: str, data: Mapping[str, Any]) -> Account:
        """
        Create a new account.

        Args:
            owner_id: Authenticated user's id
            data: Form fields ``name``, ``type``, ``balance`` and optional
                ``is_default``

        Returns:
            Created Account instance
        """
        account_data = validate_create(data).unwrap()
        account_id = self._account_repo.create(owner_id, account_data)
        return self._account_repo.get_by_id(account_id, owner_id)

    def update_account(
        self,
        account_id: str,
        owner_id: str,
        data: Mapping[str, Any],
    ) -> Account:
        """Edit an account; fields absent from ``data`` are left unchanged."""
        patch = validate_update(data).unwrap()
        self._account_repo.update(account_id, owner_id, patch)
        return self._account_repo.get_by_id(account_id, owner_id)

    def delete_account(self, account_id: str, owner_id: str) -> None:
        """Soft delete an account with a zero balance."""
        self._account_repo.soft_delete(account_id, owner_id)

    def set_default_account(self, account_id: str, owner_id: str) -> Account:
        """Make the account the owner's only default."""
        self._account_repo.set_default(account_id, owner_id)
        return self._account_repo.get_by_id(account_id, owner_id)
