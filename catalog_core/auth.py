"""User token collaborator used by searches and derived URLs."""
from __future__ import annotations

from typing import Optional, Protocol

from .errors import TokenUnavailableError


class UserTokenProvider(Protocol):
    def current_user_token(self) -> Optional[str]:
        """Return the token already known, without any I/O."""
        ...

    async def fetch_user_token(self) -> str:
        """Return a usable token, obtaining one if needed; raise on failure."""
        ...


class StaticTokenProvider:
    """Token provider holding a fixed, possibly missing, token."""

    def __init__(self, token: Optional[str] = None) -> None:
        self.token = token or None

    def current_user_token(self) -> Optional[str]:
        return self.token

    async def fetch_user_token(self) -> str:
        if not self.token:
            raise TokenUnavailableError("No user token configured")
        return self.token
