"""Explicit auth session shared by everything that talks to the backend

Lifecycle:
    UNINITIALIZED --initialize()--> AUTHENTICATED | ANONYMOUS
    ANONYMOUS --login()/register()--> AUTHENTICATED
    AUTHENTICATED --logout()--> ANONYMOUS (token store and user cleared)
"""

import logging
from dataclasses import asdict, replace
from enum import Enum
from typing import Any, Dict, Optional

from grochain_portal.domain.exceptions import ApiResponseError, ApiTransportError, DomainException, NotAuthenticatedError
from grochain_portal.domain.models import User
from grochain_portal.infrastructure.clients.auth import AuthAPI
from grochain_portal.infrastructure.clients.http import GroChainClient
from grochain_portal.infrastructure.clients.parsers import parse_user
from grochain_portal.infrastructure.token_store import TokenStore

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class AuthSession:
    """Owns the signed-in user and keeps the API client's token in sync"""

    def __init__(self, client: GroChainClient, store: TokenStore, auth_api: AuthAPI | None = None):
        self.client = client
        self.store = store
        self.auth_api = auth_api or AuthAPI(client)
        self.state = SessionState.UNINITIALIZED
        self.user: Optional[User] = None
        self.token: Optional[str] = None
        self.refresh_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.state == SessionState.AUTHENTICATED and self.user is not None

    async def initialize(self) -> SessionState:
        """
        Restore the persisted session.

        The stored token is re-validated against the profile endpoint. A
        rejected token ends the session; an unreachable backend keeps the
        cached user so the app stays usable offline.
        """
        persisted = self.store.load() or {}
        token = persisted.get("token")
        if not token:
            self.state = SessionState.ANONYMOUS
            return self.state

        self.token = token
        self.refresh_token = persisted.get("refresh_token")
        self.client.set_token(token)
        self.user = self._restore_user(persisted.get("user"))

        try:
            self.user = await self.auth_api.profile()
        except ApiResponseError as e:
            logger.warning(f"Stored session rejected: {e}")
            await self.logout(notify_backend=False)
            return self.state
        except ApiTransportError as e:
            logger.warning(f"Could not validate stored session: {e}")

        self.state = SessionState.AUTHENTICATED if self.user else SessionState.ANONYMOUS
        self._persist()
        return self.state

    @staticmethod
    def _restore_user(cached: Any) -> Optional[User]:
        """Rebuild the persisted user; a record that no longer fits the model counts as absent"""
        if not cached:
            return None
        try:
            return User(**cached)
        except TypeError as e:
            logger.warning(f"Discarding stored user: {e}")
            return None

    async def login(self, email: str, password: str) -> User:
        return self._establish(await self.auth_api.login(email, password))

    async def register(self, user_data: Dict[str, Any]) -> User:
        return self._establish(await self.auth_api.register(user_data))

    async def refresh(self) -> None:
        """Swap the refresh token for a new pair; a failed refresh signs out"""
        if not self.refresh_token:
            return
        try:
            data = await self.auth_api.refresh(self.refresh_token)
        except DomainException:
            await self.logout(notify_backend=False)
            raise

        self.token = data.get("accessToken") or data["token"]
        self.refresh_token = data.get("refreshToken", self.refresh_token)
        self.client.set_token(self.token)
        self._persist()

    async def logout(self, notify_backend: bool = True) -> None:
        """Tear down: clear the token store, client token and in-memory user"""
        if notify_backend and self.token:
            try:
                await self.auth_api.logout()
            except DomainException as e:
                logger.warning(f"Backend logout failed, clearing local session anyway: {e}")

        self.client.clear_token()
        self.store.clear()
        self.user = None
        self.token = None
        self.refresh_token = None
        self.state = SessionState.ANONYMOUS

    def update_user(self, **changes: Any) -> User:
        user = self.require_user()
        self.user = replace(user, **changes)
        self._persist()
        return self.user

    def require_user(self) -> User:
        if not self.is_authenticated:
            raise NotAuthenticatedError("Sign in to continue")
        return self.user

    def has_access(self, required_role: str | None = None) -> bool:
        """Role guard: admins pass every check"""
        if not self.is_authenticated:
            return False
        if not required_role:
            return True
        return self.user.role == required_role or self.user.role == "admin"

    def _establish(self, data: Dict[str, Any]) -> User:
        token = data.get("accessToken") or data.get("token")
        if not token:
            raise ApiResponseError("Authentication response did not include a token")

        self.user = parse_user(data.get("user") or data)
        self.token = token
        self.refresh_token = data.get("refreshToken")
        self.client.set_token(token)
        self.state = SessionState.AUTHENTICATED
        self._persist()
        return self.user

    def _persist(self) -> None:
        self.store.save(
            {
                "token": self.token,
                "refresh_token": self.refresh_token,
                "user": asdict(self.user) if self.user else None,
            }
        )
