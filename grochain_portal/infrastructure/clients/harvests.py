"""Harvest batch creation and QR verification"""

from typing import Any, Dict, Tuple

from grochain_portal.domain.models import Harvest
from grochain_portal.infrastructure.clients.http import GroChainClient
from grochain_portal.infrastructure.clients.parsers import parse_harvest


class HarvestAPI:
    def __init__(self, client: GroChainClient):
        self.client = client

    async def create_harvest(self, harvest: Dict[str, Any]) -> Harvest:
        data = await self.client.post("/api/harvests", name="harvests.create", json=harvest)
        return parse_harvest(data.get("harvest", data))

    async def verify_harvest(self, batch_id: str) -> Tuple[bool, Harvest]:
        """
        Look up a batch by the ID encoded in its QR code.

        Unknown batches come back as a 404 ApiResponseError.
        """
        data = await self.client.get(f"/api/harvests/verify/{batch_id}", name="harvests.verify")
        return bool(data.get("verified", True)), parse_harvest(data)
