"""Marketplace endpoints: listings, product detail, orders and payments"""

from typing import Any, Dict, List, Optional

from grochain_portal.domain.models import Listing, Order
from grochain_portal.infrastructure.clients.http import GroChainClient
from grochain_portal.infrastructure.clients.parsers import parse_listing, parse_order, unwrap_list


class MarketplaceAPI:
    """Client for buyer-facing marketplace resources"""

    def __init__(self, client: GroChainClient):
        self.client = client

    async def list_listings(self, filters: Optional[Dict[str, Any]] = None) -> List[Listing]:
        data = await self.client.get("/api/marketplace/listings", name="marketplace.listings", params=filters)
        return [parse_listing(doc) for doc in unwrap_list(data, "listings")]

    async def search_suggestions(self, query: str, limit: int = 10) -> List[str]:
        data = await self.client.get(
            "/api/marketplace/search-suggestions",
            name="marketplace.suggestions",
            params={"q": query, "limit": limit},
        )
        return list(unwrap_list(data, "suggestions"))

    async def get_product(self, product_id: str) -> Listing:
        data = await self.client.get(f"/api/marketplace/products/{product_id}", name="marketplace.product")
        return parse_listing(data)

    async def buyer_orders(self, buyer_id: str) -> List[Order]:
        data = await self.client.get("/api/orders", name="orders.list", params={"buyerId": buyer_id})
        return [parse_order(doc) for doc in unwrap_list(data, "orders")]

    async def initiate_payment(self, order_id: str, email: str, callback_url: str | None = None) -> Dict[str, Any]:
        """Start checkout for an order; returns the gateway's authorization data"""
        return await self.client.post(
            "/api/payments/initiate",
            name="payments.initiate",
            json={"orderId": order_id, "email": email, "callbackUrl": callback_url},
        )
