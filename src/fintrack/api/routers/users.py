"""Current-user endpoint."""

from fastapi import APIRouter, Depends

from fintrack.api.deps import get_current_user
from fintrack.api.schemas import UserResponse
from fintrack.domain.models import User

router = APIRouter(tags=["users"])


@router.get("/me", response_model=UserResponse)
def read_current_user(user: User = Depends(get_current_user)) -> UserResponse:
    """Return the authenticated user's profile."""
    return UserResponse.model_validate(user)
