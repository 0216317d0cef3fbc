"""Composition root wiring the client, session and services together"""

import httpx

from grochain_portal.auth.session import AuthSession, SessionState
from grochain_portal.config import Settings, settings as default_settings
from grochain_portal.infrastructure.clients.fintech import FintechAPI
from grochain_portal.infrastructure.clients.harvests import HarvestAPI
from grochain_portal.infrastructure.clients.http import GroChainClient
from grochain_portal.infrastructure.clients.marketplace import MarketplaceAPI
from grochain_portal.infrastructure.clients.partners import PartnerAPI
from grochain_portal.infrastructure.clients.realtime import RealtimeAPI
from grochain_portal.infrastructure.providers import get_data_provider
from grochain_portal.infrastructure.token_store import TokenStore
from grochain_portal.services.commissions import CommissionService, TTLCache
from grochain_portal.services.pages import PageDataService
from grochain_portal.services.suggestions import SuggestionFetcher


class Portal:
    """
    Everything a GroChain client application needs, built from settings.

    Usage:
        async with Portal() as portal:
            await portal.session.login(email, password)
            commissions = await portal.commissions.list_commissions()
    """

    def __init__(
        self,
        config: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        store: TokenStore | None = None,
    ):
        config = config or default_settings
        self.client = GroChainClient(config.api_base_url, config.http_timeout_seconds, transport=transport)
        self.session = AuthSession(self.client, store or TokenStore(config.token_file))
        self.provider = get_data_provider(config.data_provider)

        self.partners = PartnerAPI(self.client)
        self.marketplace = MarketplaceAPI(self.client)
        self.fintech = FintechAPI(self.client)
        self.harvests = HarvestAPI(self.client)
        self.realtime = RealtimeAPI(self.client)

        cache = TTLCache(config.commission_cache_seconds, max_size=config.commission_cache_max_entries)
        self.commissions = CommissionService(self.partners, self.provider, cache=cache)
        self.pages = PageDataService(self.partners, self.marketplace, self.fintech, self.provider)
        self.suggestions = SuggestionFetcher(self.marketplace, limit=config.suggestion_limit)

    async def start(self) -> SessionState:
        return await self.session.initialize()

    async def close(self) -> None:
        """Stop pending work; the persisted session survives for the next start"""
        self.suggestions.cancel()

    async def __aenter__(self) -> "Portal":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
