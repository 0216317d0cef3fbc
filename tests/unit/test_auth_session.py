"""Unit tests for the auth session lifecycle"""

import json

import pytest

from conftest import CONNECT_ERROR
from grochain_portal.auth.session import AuthSession, SessionState
from grochain_portal.domain.exceptions import ApiResponseError, NotAuthenticatedError
from grochain_portal.infrastructure.token_store import TokenStore

USER_DOC = {
    "_id": "u1",
    "name": "Amina Bello",
    "email": "amina@example.com",
    "role": "partner",
    "phone": "+2348030000000",
    "emailVerified": True,
}


@pytest.fixture
def store(tmp_path) -> TokenStore:
    return TokenStore(tmp_path / "auth.json")


@pytest.fixture
def session(api_client, store) -> AuthSession:
    return AuthSession(api_client, store)


def persisted(store: TokenStore):
    return json.loads(store.path.read_text(encoding="utf-8"))


async def test_initialize_without_token_is_anonymous(session):
    assert await session.initialize() == SessionState.ANONYMOUS
    assert session.is_authenticated is False


async def test_login_sets_token_and_persists(backend, session, store):
    backend.ok("POST", "/api/auth/login", {"user": USER_DOC, "accessToken": "acc-1", "refreshToken": "ref-1"})

    user = await session.login("amina@example.com", "secret")

    assert user.name == "Amina Bello"
    assert user.role == "partner"
    assert session.state == SessionState.AUTHENTICATED
    assert session.client.token == "acc-1"
    assert persisted(store)["token"] == "acc-1"
    assert persisted(store)["refresh_token"] == "ref-1"


async def test_login_rejected(backend, session):
    backend.add("POST", "/api/auth/login", {"success": False, "error": "Invalid credentials"}, status=401)

    with pytest.raises(ApiResponseError, match="Invalid credentials"):
        await session.login("amina@example.com", "wrong")

    assert session.is_authenticated is False


async def test_login_without_token_fails(backend, session):
    backend.ok("POST", "/api/auth/login", {"user": USER_DOC})

    with pytest.raises(ApiResponseError):
        await session.login("amina@example.com", "secret")


async def test_initialize_restores_valid_session(backend, api_client, store):
    store.save({"token": "acc-1", "refresh_token": "ref-1", "user": None})
    backend.ok("GET", "/api/users/profile/me", {"user": USER_DOC})

    session = AuthSession(api_client, store)

    assert await session.initialize() == SessionState.AUTHENTICATED
    assert session.user.email == "amina@example.com"
    (request,) = backend.calls("GET", "/api/users/profile/me")
    assert request.headers["authorization"] == "Bearer acc-1"


async def test_initialize_with_rejected_token_clears_everything(backend, api_client, store):
    store.save({"token": "expired", "refresh_token": None, "user": None})
    backend.add("GET", "/api/users/profile/me", {"success": False, "error": "Token expired"}, status=401)

    session = AuthSession(api_client, store)

    assert await session.initialize() == SessionState.ANONYMOUS
    assert session.user is None
    assert api_client.token is None
    assert store.load() is None
    assert backend.calls("POST", "/api/auth/logout") == []


async def test_initialize_offline_keeps_cached_user(backend, api_client, store):
    cached = {
        "id": "u1",
        "name": "Amina Bello",
        "email": "amina@example.com",
        "role": "partner",
        "phone": "",
        "email_verified": True,
        "phone_verified": False,
        "location": None,
    }
    store.save({"token": "acc-1", "refresh_token": None, "user": cached})
    backend.add("GET", "/api/users/profile/me", CONNECT_ERROR)

    session = AuthSession(api_client, store)

    assert await session.initialize() == SessionState.AUTHENTICATED
    assert session.user.name == "Amina Bello"


STALE_USER = {
    "id": "u1",
    "name": "Amina Bello",
    "email": "amina@example.com",
    "role": "partner",
    "avatar": "https://cdn.example.com/u1.png",
}


async def test_initialize_offline_with_stale_cached_user(backend, api_client, store):
    """A stored user that no longer matches the model is treated as missing"""
    store.save({"token": "acc-1", "refresh_token": None, "user": STALE_USER})
    backend.add("GET", "/api/users/profile/me", CONNECT_ERROR)

    session = AuthSession(api_client, store)

    assert await session.initialize() == SessionState.ANONYMOUS
    assert session.user is None


async def test_initialize_replaces_stale_cached_user_from_backend(backend, api_client, store):
    store.save({"token": "acc-1", "refresh_token": None, "user": STALE_USER})
    backend.ok("GET", "/api/users/profile/me", {"user": USER_DOC})

    session = AuthSession(api_client, store)

    assert await session.initialize() == SessionState.AUTHENTICATED
    assert session.user.phone == "+2348030000000"
    assert "avatar" not in persisted(store)["user"]


async def test_logout_clears_session_even_if_backend_fails(backend, session, store):
    backend.ok("POST", "/api/auth/login", {"user": USER_DOC, "accessToken": "acc-1"})
    backend.add("POST", "/api/auth/logout", {"message": "boom"}, status=500)
    await session.login("amina@example.com", "secret")

    await session.logout()

    assert session.state == SessionState.ANONYMOUS
    assert session.user is None
    assert session.client.token is None
    assert store.load() is None
    assert len(backend.calls("POST", "/api/auth/logout")) == 1


async def test_refresh_rotates_tokens(backend, session, store):
    backend.ok("POST", "/api/auth/login", {"user": USER_DOC, "accessToken": "acc-1", "refreshToken": "ref-1"})
    backend.ok("POST", "/api/auth/refresh", {"accessToken": "acc-2", "refreshToken": "ref-2"})
    await session.login("amina@example.com", "secret")

    await session.refresh()

    assert session.client.token == "acc-2"
    assert persisted(store)["refresh_token"] == "ref-2"
    (request,) = backend.calls("POST", "/api/auth/refresh")
    assert json.loads(request.content) == {"refreshToken": "ref-1"}


async def test_failed_refresh_signs_out(backend, session):
    backend.ok("POST", "/api/auth/login", {"user": USER_DOC, "accessToken": "acc-1", "refreshToken": "ref-1"})
    backend.add("POST", "/api/auth/refresh", {"message": "Refresh token revoked"}, status=401)
    await session.login("amina@example.com", "secret")

    with pytest.raises(ApiResponseError):
        await session.refresh()

    assert session.state == SessionState.ANONYMOUS


async def test_role_guard(backend, session):
    assert session.has_access("partner") is False

    backend.ok("POST", "/api/auth/login", {"user": USER_DOC, "accessToken": "acc-1"})
    await session.login("amina@example.com", "secret")

    assert session.has_access() is True
    assert session.has_access("partner") is True
    assert session.has_access("buyer") is False


async def test_admin_passes_every_role_check(backend, session):
    backend.ok("POST", "/api/auth/login", {"user": {**USER_DOC, "role": "admin"}, "accessToken": "acc-1"})
    await session.login("amina@example.com", "secret")

    assert session.has_access("buyer") is True


async def test_update_user_persists(backend, session, store):
    backend.ok("POST", "/api/auth/login", {"user": USER_DOC, "accessToken": "acc-1"})
    await session.login("amina@example.com", "secret")

    session.update_user(location="Kaduna")

    assert persisted(store)["user"]["location"] == "Kaduna"


def test_require_user_when_signed_out(session):
    with pytest.raises(NotAuthenticatedError):
        session.require_user()


def test_token_store_ignores_corrupt_file(store):
    store.path.write_text("{not json", encoding="utf-8")
    assert store.load() is None


async def test_register_signs_in(backend, session):
    backend.ok("POST", "/api/auth/register", {"user": {**USER_DOC, "role": "farmer"}, "token": "acc-9"})

    user = await session.register({"name": "Amina Bello", "email": "amina@example.com", "role": "farmer"})

    assert user.role == "farmer"
    assert session.is_authenticated is True
    assert session.client.token == "acc-9"
