"""WebSocket service control endpoints"""

from typing import Any, Dict

from grochain_portal.infrastructure.clients.http import GroChainClient


class RealtimeAPI:
    def __init__(self, client: GroChainClient):
        self.client = client

    async def status(self) -> Dict[str, Any]:
        return await self.client.get("/api/websocket/status", name="websocket.status")

    async def notify_user(self, user_id: str, event: str, payload: Dict[str, Any] | None = None) -> Dict[str, Any]:
        """Push an event to one user's open sockets"""
        return await self.client.post(
            "/api/websocket/notify-user",
            name="websocket.notify_user",
            json={"userId": user_id, "event": event, "data": payload or {}},
        )
