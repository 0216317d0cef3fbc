"""Marketplace search-as-you-type suggestions"""

import asyncio
import logging
from typing import List, Optional

from grochain_portal.config import settings
from grochain_portal.infrastructure.clients.marketplace import MarketplaceAPI

logger = logging.getLogger(__name__)


class SuggestionFetcher:
    """
    Fetch suggestions for the latest query only.

    A new query cancels the request still in flight for the previous one.
    Superseded calls return None instead of stale suggestions.
    """

    def __init__(self, api: MarketplaceAPI, limit: int | None = None, min_length: int = 1):
        self.api = api
        self.limit = limit or settings.suggestion_limit
        self.min_length = min_length
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    def cancel(self) -> None:
        """Drop any pending request, e.g. when the search box closes"""
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def suggest(self, query: str) -> Optional[List[str]]:
        self.cancel()
        generation = self._generation

        query = query.strip()
        if len(query) < self.min_length:
            return []

        task = asyncio.create_task(self.api.search_suggestions(query, self.limit))
        self._task = task
        try:
            suggestions = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug("Suggestion request superseded", extra={"query": query})
                return None
            raise

        if generation != self._generation:
            return None
        return suggestions
