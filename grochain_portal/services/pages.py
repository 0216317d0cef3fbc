"""Backend reads behind the dashboard list pages"""

from typing import Any, Dict, List, Optional

from grochain_portal.domain.models import CreditScore, Farmer, Listing, Order, Referral
from grochain_portal.infrastructure.clients.fintech import FintechAPI
from grochain_portal.infrastructure.clients.marketplace import MarketplaceAPI
from grochain_portal.infrastructure.clients.parsers import (
    parse_credit_score,
    parse_farmer,
    parse_listing,
    parse_order,
    parse_referral,
    unwrap_list,
)
from grochain_portal.infrastructure.clients.partners import PartnerAPI
from grochain_portal.infrastructure.providers import DataProvider


class PageDataService:
    """Loads the raw lists each page filters and paginates locally"""

    def __init__(
        self,
        partners: PartnerAPI,
        marketplace: MarketplaceAPI,
        fintech: FintechAPI,
        provider: DataProvider,
    ):
        self.partners = partners
        self.marketplace = marketplace
        self.fintech = fintech
        self.provider = provider

    async def farmers(self, filters: Optional[Dict[str, Any]] = None) -> List[Farmer]:
        return await self.provider.read(
            "farmers",
            lambda: self.partners.list_farmers(filters),
            lambda raw: [parse_farmer(doc) for doc in unwrap_list(raw, "farmers")],
        )

    async def referrals(self, filters: Optional[Dict[str, Any]] = None) -> List[Referral]:
        return await self.provider.read(
            "referrals",
            lambda: self.partners.list_referrals(filters),
            lambda raw: [parse_referral(doc) for doc in unwrap_list(raw, "referrals")],
        )

    async def listings(self, filters: Optional[Dict[str, Any]] = None) -> List[Listing]:
        return await self.provider.read(
            "listings",
            lambda: self.marketplace.list_listings(filters),
            lambda raw: [parse_listing(doc) for doc in unwrap_list(raw, "listings")],
        )

    async def buyer_orders(self, buyer_id: str) -> List[Order]:
        return await self.provider.read(
            "orders",
            lambda: self.marketplace.buyer_orders(buyer_id),
            lambda raw: [parse_order(doc) for doc in unwrap_list(raw, "orders")],
        )

    async def credit_score(self, user_id: str) -> CreditScore:
        return await self.provider.read(
            "credit_score",
            lambda: self.fintech.credit_score(user_id),
            parse_credit_score,
        )
