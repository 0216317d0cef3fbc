"""Marketplace, buyer order and payment endpoints"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from grochain_portal.api.dependencies import get_marketplace_api, get_page_data
from grochain_portal.api.v1.schemas import (
    ListingsResponse,
    OrdersResponse,
    OrderStats,
    Pagination,
    PaymentRequest,
    SuggestionsResponse,
)
from grochain_portal.config import settings
from grochain_portal.domain.listing import ALL, ListQuery, contains_text, order_filter, order_stats, paginate
from grochain_portal.domain.models import Listing
from grochain_portal.infrastructure.clients.marketplace import MarketplaceAPI
from grochain_portal.services.pages import PageDataService

router = APIRouter()


@router.get("/marketplace/listings", response_model=ListingsResponse)
async def list_listings(
    search: str = Query("", description="Product name, category or location"),
    category: str = Query(ALL),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=100),
    pages: PageDataService = Depends(get_page_data),
):
    listings = await pages.listings()

    def predicate(listing: Listing) -> bool:
        return contains_text(search, listing.name, listing.category, listing.location) and (
            category == ALL or listing.category == category
        )

    result = paginate(predicate, listings, page, page_size)
    return ListingsResponse(items=result.items, pagination=Pagination.of(result))


@router.get("/marketplace/suggestions", response_model=SuggestionsResponse)
async def search_suggestions(
    q: str = Query("", max_length=100),
    api: MarketplaceAPI = Depends(get_marketplace_api),
):
    if not q.strip():
        return SuggestionsResponse(query=q, suggestions=[])
    suggestions = await api.search_suggestions(q.strip(), settings.suggestion_limit)
    return SuggestionsResponse(query=q, suggestions=suggestions)


@router.get("/marketplace/products/{product_id}", response_model=Listing)
async def get_product(product_id: str, api: MarketplaceAPI = Depends(get_marketplace_api)):
    return await api.get_product(product_id)


@router.get("/orders", response_model=OrdersResponse)
async def list_orders(
    buyer_id: str = Query(..., min_length=1),
    search: str = Query(""),
    status: str = Query(ALL),
    payment_status: str = Query(ALL),
    date_range: str = Query(ALL, description="today | week | month | quarter | year | all"),
    tab: str = Query(ALL),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=100),
    pages: PageDataService = Depends(get_page_data),
):
    """Buyer's orders; stats cover all orders regardless of filters"""
    orders = await pages.buyer_orders(buyer_id)
    query = ListQuery(
        filters={
            "search": search,
            "status": status,
            "payment_status": payment_status,
            "date_range": date_range,
            "tab": tab,
        },
        page=page,
        page_size=page_size,
    )
    result = query.apply(order_filter, orders)

    return OrdersResponse(
        items=result.items,
        pagination=Pagination.of(result),
        stats=OrderStats(**order_stats(orders)),
    )


@router.post("/payments/initiate")
async def initiate_payment(
    body: PaymentRequest,
    api: MarketplaceAPI = Depends(get_marketplace_api),
) -> Dict[str, Any]:
    result = await api.initiate_payment(body.order_id, body.email, body.callback_url)
    return {"success": True, "data": result}
