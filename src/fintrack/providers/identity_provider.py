"""Identity provider protocol."""

from typing import Mapping, Optional, Protocol

from fintrack.domain.models import User


class IdentityProvider(Protocol):
    """
    Protocol for identity providers.

    Implementations resolve the authenticated user for a request. The account
    core never verifies identity itself; it trusts the id returned here.
    """

    def current_user(self, headers: Mapping[str, str]) -> Optional[User]:
        """Return the signed-in user, or None when the request is anonymous."""
        ...
