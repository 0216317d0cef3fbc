"""Partner farmer and referral endpoints"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from grochain_portal.api.dependencies import get_page_data, get_partner_api
from grochain_portal.api.v1.schemas import FarmersResponse, Pagination, ReferralsResponse
from grochain_portal.config import settings
from grochain_portal.domain.listing import (
    ListQuery,
    active_referrals,
    farmer_filter,
    referral_filter,
    status_counts,
)
from grochain_portal.infrastructure.clients.partners import PartnerAPI
from grochain_portal.services.pages import PageDataService

router = APIRouter()


@router.get("/farmers", response_model=FarmersResponse)
async def list_farmers(
    search: str = Query("", description="Name, email or phone"),
    status: str = Query("all"),
    location: str = Query("all"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=100),
    pages: PageDataService = Depends(get_page_data),
):
    farmers = await pages.farmers()
    query = ListQuery(
        filters={"search": search, "status": status, "location": location},
        page=page,
        page_size=page_size,
    )
    result = query.apply(farmer_filter, farmers)

    return FarmersResponse(
        items=result.items,
        pagination=Pagination.of(result),
        status_counts=status_counts(farmers),
    )


@router.get("/referrals", response_model=ReferralsResponse)
async def list_referrals(
    search: str = Query("", description="Farmer name or email"),
    status: str = Query("all"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=100),
    pages: PageDataService = Depends(get_page_data),
):
    referrals = await pages.referrals()
    query = ListQuery(filters={"search": search, "status": status}, page=page, page_size=page_size)
    result = query.apply(referral_filter, referrals)

    return ReferralsResponse(
        items=result.items,
        pagination=Pagination.of(result),
        active_count=len(active_referrals(referrals)),
    )


@router.post("/referrals/{farmer_id}/complete")
async def complete_referral(farmer_id: str, api: PartnerAPI = Depends(get_partner_api)) -> Dict[str, Any]:
    result = await api.complete_referral(farmer_id)
    return {"success": True, "data": result}
