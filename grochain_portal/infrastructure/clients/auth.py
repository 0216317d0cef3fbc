"""Authentication and profile endpoints"""

from typing import Any, Dict

from grochain_portal.domain.models import User
from grochain_portal.infrastructure.clients.http import GroChainClient
from grochain_portal.infrastructure.clients.parsers import parse_user


class AuthAPI:
    def __init__(self, client: GroChainClient):
        self.client = client

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        return await self.client.post("/api/auth/login", name="auth.login", json={"email": email, "password": password})

    async def register(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.post("/api/auth/register", name="auth.register", json=user_data)

    async def refresh(self, refresh_token: str) -> Dict[str, Any]:
        return await self.client.post("/api/auth/refresh", name="auth.refresh", json={"refreshToken": refresh_token})

    async def logout(self) -> None:
        await self.client.post("/api/auth/logout", name="auth.logout")

    async def profile(self) -> User:
        data = await self.client.get("/api/users/profile/me", name="users.profile")
        return parse_user(data.get("user", data) if isinstance(data, dict) else data)
