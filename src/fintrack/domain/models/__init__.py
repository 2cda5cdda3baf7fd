"""Domain models package."""

from fintrack.domain.models.enums import AccountType
from fintrack.domain.models.account import Account
from fintrack.domain.models.user import User, UserPreferences

__all__ = [
    "AccountType",
    "Account",
    "User",
    "UserPreferences",
]
