"""Free-text search over companies and tags, plus the search history."""
from __future__ import annotations

import logging
from typing import List, Optional

from .auth import UserTokenProvider
from .config import CatalogSettings
from .history import SearchHistoryStore
from .mapper import parse_search_result
from .models import SearchHistoryEntry, SearchResult
from .transport import RequestIssuer

LOGGER = logging.getLogger(__name__)


class SearchService:
    def __init__(
        self,
        settings: CatalogSettings,
        requester: RequestIssuer,
        token_provider: UserTokenProvider,
        history: Optional[SearchHistoryStore] = None,
    ) -> None:
        self.settings = settings
        self.requester = requester
        self.token_provider = token_provider
        self.history = history or SearchHistoryStore(
            settings.history_path, max_entries=settings.max_history
        )

    async def generic_search(self, query: str) -> SearchResult:
        """Search companies and tags matching ``query``.

        A user token is obtained first; if that fails its error propagates and
        no search request is made.
        """

        await self.token_provider.fetch_user_token()
        url = self.settings.url_for("search")
        LOGGER.debug("Performing search with URL %s", url)
        json = await self.requester.get(url, {"q": query})
        return parse_search_result(json)

    def add_to_history(self, entry: SearchHistoryEntry) -> List[SearchHistoryEntry]:
        return self.history.add_to_history(entry)

    def get_saved_history(self) -> Optional[List[SearchHistoryEntry]]:
        return self.history.get_saved_history()
