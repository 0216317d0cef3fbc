"""Pytest fixtures for testing"""

from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from grochain_portal.api import dependencies
from grochain_portal.api.main import create_app
from grochain_portal.infrastructure.clients.http import GroChainClient
from grochain_portal.infrastructure.providers import DemoDataProvider, StrictDataProvider

BACKEND_URL = "http://backend.test"

# Route body that makes the fake backend drop the connection
CONNECT_ERROR = object()


class FakeBackend:
    """In-process GroChain backend served through httpx.MockTransport"""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def ok(self, method: str, path: str, data: Any) -> None:
        self.add(method, path, {"success": True, "data": data})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, text="")
        status, body = self.routes[key]
        if body is CONNECT_ERROR:
            raise httpx.ConnectError("Connection refused", request=request)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def api_client(backend: FakeBackend) -> GroChainClient:
    """GroChain client wired to the fake backend"""
    return GroChainClient(base_url=BACKEND_URL, transport=backend.transport)


def _make_test_client(backend: FakeBackend, provider) -> TestClient:
    app = create_app()

    def override_get_client():
        return GroChainClient(base_url=BACKEND_URL, transport=backend.transport)

    app.dependency_overrides[dependencies.get_client] = override_get_client
    app.dependency_overrides[dependencies.get_provider] = lambda: provider
    dependencies._commission_cache.clear()
    return TestClient(app)


@pytest.fixture
def client(backend: FakeBackend) -> TestClient:
    """View service in strict mode: backend failures surface as HTTP errors"""
    return _make_test_client(backend, StrictDataProvider())


@pytest.fixture
def demo_client(backend: FakeBackend) -> TestClient:
    """View service falling back to demo data"""
    return _make_test_client(backend, DemoDataProvider())


def farmer_doc(i: int, **overrides: Any) -> Dict[str, Any]:
    doc = {
        "_id": f"farmer{i}",
        "name": f"Farmer {i}",
        "email": f"farmer{i}@example.com",
        "phone": f"+23480000000{i:02d}",
        "location": "Kaduna" if i % 2 else "Kano",
        "status": "active" if i % 3 else "inactive",
        "joinedAt": "2024-01-05T00:00:00Z",
        "totalHarvests": i,
        "totalEarnings": i * 1000,
    }
    doc.update(overrides)
    return doc


def commission_doc(i: int, status: str = "pending", amount: float = 1000, **overrides: Any) -> Dict[str, Any]:
    doc = {
        "_id": f"c{i}",
        "farmer": {"_id": f"farmer{i}", "name": f"Farmer {i}", "email": f"farmer{i}@example.com"},
        "order": {"_id": f"order{i}", "orderNumber": f"ORD{i:03d}", "total": amount * 20, "status": "completed"},
        "amount": amount,
        "rate": 0.05,
        "status": status,
        "orderAmount": amount * 20,
        "orderDate": "2024-01-20T00:00:00Z",
    }
    doc.update(overrides)
    return doc


def referral_doc(i: int, status: str = "active", **overrides: Any) -> Dict[str, Any]:
    doc = {
        "_id": f"ref{i}",
        "farmer": {"_id": f"farmer{i}", "name": f"Farmer {i}", "email": f"farmer{i}@example.com"},
        "commissionRate": 0.05,
        "status": status,
        "notes": "",
        "createdAt": "2024-02-01T00:00:00Z",
    }
    doc.update(overrides)
    return doc


def order_doc(i: int, created_at: str, status: str = "pending", payment_status: str = "paid", **overrides: Any):
    doc = {
        "_id": f"o{i}",
        "orderNumber": f"ORD-{i:04d}",
        "status": status,
        "paymentStatus": payment_status,
        "total": 10000 * i,
        "items": [{"cropName": "Rice" if i % 2 else "Maize", "quantity": 2, "price": 5000 * i}],
        "seller": {"_id": "seller1", "name": "Green Acres"},
        "createdAt": created_at,
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def make_farmers() -> Callable[[int], List[Dict[str, Any]]]:
    return lambda count: [farmer_doc(i) for i in range(1, count + 1)]
