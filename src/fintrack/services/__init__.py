"""Service layer - business logic orchestration."""

from fintrack.services.account_service import AccountService

__all__ = [
    "AccountService",
]
