"""Commission reads with a short-lived cache and demo fallback"""

import json
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, List, Optional, Tuple

from grochain_portal.config import settings
from grochain_portal.domain.models import Commission
from grochain_portal.infrastructure.clients.parsers import parse_commission, unwrap_list
from grochain_portal.infrastructure.clients.partners import PartnerAPI
from grochain_portal.infrastructure.providers import DataProvider


class TTLCache:
    """In-memory LRU cache whose entries expire after `ttl` seconds"""

    DEFAULT_MAX_SIZE = 1000

    def __init__(
        self,
        ttl: float,
        clock: Callable[[], float] = time.monotonic,
        max_size: int = DEFAULT_MAX_SIZE,
    ):
        self.ttl = ttl
        self.clock = clock
        self.max_size = max_size
        self._entries: "OrderedDict[str, Tuple[float, Any]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return value

    def set(self, key: str, value: Any) -> None:
        now = self.clock()
        self._purge_expired(now)
        self._entries.pop(key, None)
        while self._entries and len(self._entries) >= self.max_size:
            self._entries.popitem(last=False)
        self._entries[key] = (now + self.ttl, value)

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()


class CommissionService:
    """
    Partner commission reads and actions.

    Reads are cached per filter set for `commission_cache_seconds`. Any
    status change or payout clears the whole cache so the next read
    re-fetches from the backend.
    """

    def __init__(
        self,
        api: PartnerAPI,
        provider: DataProvider,
        cache: TTLCache | None = None,
        scope: str = "",
    ):
        self.api = api
        self.provider = provider
        if cache is None:
            cache = TTLCache(settings.commission_cache_seconds, max_size=settings.commission_cache_max_entries)
        self.cache = cache
        # Separates callers sharing one cache
        self.scope = scope

    async def _cached(self, key: str, load: Callable[[], Any]) -> Any:
        key = f"commission_{self.scope}_{key}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        value = await load()
        self.cache.set(key, value)
        return value

    async def list_commissions(self, filters: Optional[Dict[str, Any]] = None) -> List[Commission]:
        key = f"commissions_{json.dumps(filters or {}, sort_keys=True)}"
        return await self._cached(
            key,
            lambda: self.provider.read(
                "commissions",
                lambda: self.api.list_commissions(filters),
                lambda raw: [parse_commission(doc) for doc in unwrap_list(raw, "commissions")],
            ),
        )

    async def get_commission(self, commission_id: str) -> Commission:
        return await self._cached(
            f"commission_{commission_id}",
            lambda: self.api.get_commission(commission_id),
        )

    async def stats(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        key = f"stats_{json.dumps(filters or {}, sort_keys=True)}"
        return await self._cached(
            key,
            lambda: self.provider.read("commission_stats", lambda: self.api.commission_stats(filters), dict),
        )

    async def partner_summary(self, partner_id: str) -> Dict[str, Any]:
        return await self._cached(
            f"summary_{partner_id}",
            lambda: self.provider.read(
                "commission_summary", lambda: self.api.partner_commission_summary(partner_id), dict
            ),
        )

    async def update_status(self, commission_id: str, status: str, notes: str | None = None) -> Commission:
        commission = await self.api.update_commission_status(commission_id, status, notes)
        self.cache.clear()
        return commission

    async def process_payout(
        self,
        commission_ids: List[str],
        payout_method: str = "bank_transfer",
        payout_details: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        result = await self.api.process_payout(commission_ids, payout_method, payout_details)
        self.cache.clear()
        return result
