"""Dependency injection for FastAPI endpoints"""

import hashlib

from fastapi import Depends, Request

from grochain_portal.config import settings
from grochain_portal.infrastructure.clients.fintech import FintechAPI
from grochain_portal.infrastructure.clients.harvests import HarvestAPI
from grochain_portal.infrastructure.clients.http import GroChainClient
from grochain_portal.infrastructure.clients.marketplace import MarketplaceAPI
from grochain_portal.infrastructure.clients.partners import PartnerAPI
from grochain_portal.infrastructure.clients.realtime import RealtimeAPI
from grochain_portal.infrastructure.providers import DataProvider, get_data_provider
from grochain_portal.services.commissions import CommissionService, TTLCache
from grochain_portal.services.pages import PageDataService

# Shared across requests; keys are scoped per caller token
_commission_cache = TTLCache(
    settings.commission_cache_seconds, max_size=settings.commission_cache_max_entries
)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def get_client(request: Request) -> GroChainClient:
    """Backend client acting with the caller's bearer token"""
    return GroChainClient(token=_bearer_token(request))


def get_provider() -> DataProvider:
    return get_data_provider()


def get_partner_api(client: GroChainClient = Depends(get_client)) -> PartnerAPI:
    return PartnerAPI(client)


def get_marketplace_api(client: GroChainClient = Depends(get_client)) -> MarketplaceAPI:
    return MarketplaceAPI(client)


def get_fintech_api(client: GroChainClient = Depends(get_client)) -> FintechAPI:
    return FintechAPI(client)


def get_harvest_api(client: GroChainClient = Depends(get_client)) -> HarvestAPI:
    return HarvestAPI(client)


def get_realtime_api(client: GroChainClient = Depends(get_client)) -> RealtimeAPI:
    return RealtimeAPI(client)


def get_commission_service(
    request: Request,
    api: PartnerAPI = Depends(get_partner_api),
    provider: DataProvider = Depends(get_provider),
) -> CommissionService:
    token = _bearer_token(request) or ""
    scope = hashlib.sha256(token.encode()).hexdigest()[:16]
    return CommissionService(api, provider, cache=_commission_cache, scope=scope)


def get_page_data(
    partners: PartnerAPI = Depends(get_partner_api),
    marketplace: MarketplaceAPI = Depends(get_marketplace_api),
    fintech: FintechAPI = Depends(get_fintech_api),
    provider: DataProvider = Depends(get_provider),
) -> PageDataService:
    return PageDataService(partners, marketplace, fintech, provider)
