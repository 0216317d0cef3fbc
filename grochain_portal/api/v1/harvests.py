"""Harvest traceability and realtime notification endpoints"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from grochain_portal.api.dependencies import get_harvest_api, get_realtime_api
from grochain_portal.api.v1.schemas import HarvestResponse, NotifyUserRequest
from grochain_portal.domain.models import Harvest
from grochain_portal.infrastructure.clients.harvests import HarvestAPI
from grochain_portal.infrastructure.clients.realtime import RealtimeAPI

router = APIRouter()


@router.get("/harvests/verify/{batch_id}", response_model=HarvestResponse)
async def verify_harvest(batch_id: str, api: HarvestAPI = Depends(get_harvest_api)):
    """Resolve a scanned QR batch ID; unknown batches surface as 404"""
    verified, harvest = await api.verify_harvest(batch_id)
    return HarvestResponse(verified=verified, harvest=harvest)


@router.post("/harvests", response_model=Harvest, status_code=201)
async def create_harvest(
    harvest: Dict[str, Any] = Body(...),
    api: HarvestAPI = Depends(get_harvest_api),
):
    return await api.create_harvest(harvest)


@router.get("/websocket/status")
async def websocket_status(api: RealtimeAPI = Depends(get_realtime_api)) -> Dict[str, Any]:
    return await api.status()


@router.post("/websocket/notify-user")
async def notify_user(body: NotifyUserRequest, api: RealtimeAPI = Depends(get_realtime_api)) -> Dict[str, Any]:
    result = await api.notify_user(body.user_id, body.event, body.data)
    return {"success": True, "data": result}
