"""Pydantic schemas for account endpoints.

Request bodies accept loosely typed fields so that form validation can
report every failing field at once with its own messages.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field

from fintrack.domain.models import Account, AccountType


class AccountCreate(BaseModel):
    """Request schema for creating an account."""

    name: Any = Field(default=None, description="Account name, 1-50 characters")
    type: Any = Field(default=None, description="checking, savings, credit_card or cash")
    balance: Any = Field(default=None, description="Current balance in USD")
    is_default: Any = Field(default=None, description="Make this the default account")


class AccountUpdate(AccountCreate):
    """Request schema for editing an account. Omitted fields are unchanged."""


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    account_id: str
    owner_id: str
    name: str
    account_type: AccountType
    type_label: str
    balance: Decimal
    is_default: bool
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    @classmethod
    def from_domain(cls, account: Account) -> "AccountResponse":
        return cls(
            account_id=account.account_id,
            owner_id=account.owner_id,
            name=account.name,
            account_type=account.account_type,
            type_label=account.account_type.label,
            balance=account.balance,
            is_default=account.is_default,
            is_active=account.is_active,
            created_at=account.created_at,
            updated_at=account.updated_at,
            last_updated=account.last_updated,
        )


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountResponse]
    count: int
