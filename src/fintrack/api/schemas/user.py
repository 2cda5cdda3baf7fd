"""Pydantic schemas for the current-user endpoint."""

from typing import Optional

from pydantic import BaseModel


class UserPreferencesResponse(BaseModel):
    """Display and notification preferences."""

    model_config = {"from_attributes": True}

    currency: str
    timezone: str
    bill_reminders: bool
    low_balance: bool
    email_notifications: bool


class UserResponse(BaseModel):
    """Profile of the authenticated user."""

    model_config = {"from_attributes": True}

    user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    preferences: UserPreferencesResponse
