"""Account endpoints. All routes are scoped to the authenticated user."""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from fintrack.api.deps import get_account_service, get_current_user
from fintrack.api.schemas import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountListResponse,
)
from fintrack.domain.models import User
from fintrack.services import AccountService

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("/", response_model=AccountListResponse)
def list_accounts(
    user: User = Depends(get_current_user),
    svc: AccountService = Depends(get_account_service),
) -> AccountListResponse:
    """List active accounts, newest first."""
    accounts = svc.list_accounts(user.user_id)
    return AccountListResponse(
        accounts=[AccountResponse.from_domain(a) for a in accounts],
        count=len(accounts),
    )


@router.post("/", response_model=AccountResponse, status_code=201)
def create_account(
    data: AccountCreate,
    user: User = Depends(get_current_user),
    svc: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Create a new account."""
    account = svc.create_account(user.user_id, data.model_dump(exclude_unset=True))
    return AccountResponse.from_domain(account)


@router.get("/default", response_model=Optional[AccountResponse])
def get_default_account(
    user: User = Depends(get_current_user),
    svc: AccountService = Depends(get_account_service),
) -> Optional[AccountResponse]:
    """Return the default account, or null when none is marked."""
    account = svc.get_default_account(user.user_id)
    return AccountResponse.from_domain(account) if account else None


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    user: User = Depends(get_current_user),
    svc: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Get a single account."""
    return AccountResponse.from_domain(svc.get_account(account_id, user.user_id))


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: str,
    data: AccountUpdate,
    user: User = Depends(get_current_user),
    svc: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Edit an account. Omitted fields keep their values."""
    account = svc.update_account(
        account_id, user.user_id, data.model_dump(exclude_unset=True)
    )
    return AccountResponse.from_domain(account)


@router.post("/{account_id}/default", response_model=AccountResponse)
def set_default_account(
    account_id: str,
    user: User = Depends(get_current_user),
    svc: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Make the account the user's only default."""
    return AccountResponse.from_domain(svc.set_default_account(account_id, user.user_id))


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account_id: str,
    user: User = Depends(get_current_user),
    svc: AccountService = Depends(get_account_service),
) -> Response:
    """Soft delete an account. Fails unless its balance is zero."""
    svc.delete_account(account_id, user.user_id)
    return Response(status_code=204)
