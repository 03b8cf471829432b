"""Collaborator stubs shared by the catalog tests."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from catalog_core.errors import TokenUnavailableError


class StubRequester:
    """Records every GET and answers from a queue of canned responses.

    A queued exception instance is raised instead of returned.
    """

    def __init__(self, *responses: Any) -> None:
        self.responses: List[Any] = list(responses)
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    async def get(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        self.calls.append((url, dict(params or {})))
        response = self.responses.pop(0) if self.responses else []
        if isinstance(response, BaseException):
            raise response
        return response


class StubTokenProvider:
    def __init__(self, token: Optional[str] = "token-123", fail: bool = False) -> None:
        self.token = token
        self.fail = fail
        self.fetches = 0

    def current_user_token(self) -> Optional[str]:
        return self.token

    async def fetch_user_token(self) -> str:
        self.fetches += 1
        if self.fail or not self.token:
            raise TokenUnavailableError("login required")
        return self.token
