"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fintrack.domain.models.enums import AccountType


@dataclass
class Account:
    """
    A named financial account owned by exactly one user.

    Accounts are never physically deleted; ``is_active`` False marks a
    logically deleted record. At most one active account per owner is the
    default.
    """

    account_id: str
    owner_id: str
    name: str
    account_type: AccountType
    balance: Decimal = Decimal("0")
    is_default: bool = False
    is_active: bool = True
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)
    last_updated: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.account_type, str):
            self.account_type = AccountType(self.account_type)
        if not isinstance(self.balance, Decimal):
            self.balance = Decimal(str(self.balance))

    @property
    def has_zero_balance(self) -> bool:
        return self.balance == 0
