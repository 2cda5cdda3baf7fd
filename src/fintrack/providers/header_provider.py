"""Identity provider that trusts headers set by an authenticating proxy."""

from typing import Mapping, Optional

from fintrack.config.settings import Settings, get_settings
from fintrack.domain.models import User


class HeaderIdentityProvider:
    """
    Reads the user profile from request headers.

    Meant to sit behind a gateway that has already authenticated the caller
    and strips these headers from untrusted traffic.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def current_user(self, headers: Mapping[str, str]) -> Optional[User]:
        """Build a User from headers; None when the user id header is missing."""
        user_id = self._header(headers, self._settings.user_id_header)
        if not user_id:
            return None
        return User(
            user_id=user_id,
            email=self._header(headers, self._settings.user_email_header),
            display_name=self._header(headers, self._settings.user_name_header),
            photo_url=self._header(headers, self._settings.user_photo_header),
        )

    @staticmethod
    def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
        value = headers.get(name)
        if value is None:
            value = headers.get(name.lower())
        if value is None:
            return None
        value = value.strip()
        return value or None
