"""Identity providers module."""

from fintrack.providers.identity_provider import IdentityProvider
from fintrack.providers.header_provider import HeaderIdentityProvider

__all__ = [
    "IdentityProvider",
    "HeaderIdentityProvider",
]
