"""User profile supplied by the identity provider."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class UserPreferences:
    """Per-user display and notification preferences."""

    currency: str = "USD"
    timezone: str = "UTC"
    bill_reminders: bool = True
    low_balance: bool = True
    email_notifications: bool = True


@dataclass
class User:
    """Authenticated user. Only ``user_id`` is used by the account core."""

    user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    preferences: UserPreferences = field(default_factory=UserPreferences)
