"""API request/response schemas."""

from fintrack.api.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountListResponse,
)
from fintrack.api.schemas.user import UserPreferencesResponse, UserResponse

__all__ = [
    "AccountCreate",
    "AccountUpdate",
    "AccountResponse",
    "AccountListResponse",
    "UserPreferencesResponse",
    "UserResponse",
]
