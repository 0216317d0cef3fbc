"""Commission dashboard endpoints"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Query, Request

from grochain_portal.api.dependencies import get_commission_service, get_request_id
from grochain_portal.api.v1.schemas import CommissionsResponse, CommissionSummary, Pagination, PayoutRequest
from grochain_portal.config import settings
from grochain_portal.domain.listing import ListQuery, commission_filter, commission_summary
from grochain_portal.services.commissions import CommissionService

router = APIRouter()


@router.get("/commissions", response_model=CommissionsResponse)
async def list_commissions(
    search: str = Query("", description="Farmer name or order number"),
    status: str = Query("all"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=100),
    service: CommissionService = Depends(get_commission_service),
):
    """
    Commissions earned by the calling partner.

    The summary covers every commission returned by the backend, not only
    the current page.
    """
    commissions = await service.list_commissions()
    query = ListQuery(filters={"search": search, "status": status}, page=page, page_size=page_size)
    result = query.apply(commission_filter, commissions)

    return CommissionsResponse(
        items=result.items,
        pagination=Pagination.of(result),
        summary=CommissionSummary(**commission_summary(commissions)),
    )


@router.post("/commissions/payout")
async def request_payout(
    body: PayoutRequest,
    request: Request,
    service: CommissionService = Depends(get_commission_service),
) -> Dict[str, Any]:
    """Request payout of approved commissions; later reads re-fetch"""
    result = await service.process_payout(body.commission_ids, body.payout_method, body.payout_details)
    logging.info(
        "Commission payout requested",
        extra={"request_id": get_request_id(request), "commission_count": len(body.commission_ids)},
    )
    return {"success": True, "data": result}
