"""API routers package."""

from fintrack.api.routers.accounts import router as accounts_router
from fintrack.api.routers.users import router as users_router

__all__ = [
    "accounts_router",
    "users_router",
]
