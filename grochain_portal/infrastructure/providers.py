"""Data providers consulted when a backend read fails

The demo provider keeps pages navigable with canned data; the strict
provider lets the failure propagate.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, TypeVar

from grochain_portal.config import settings
from grochain_portal.domain.exceptions import ApiResponseError, ApiTransportError, DomainException
from grochain_portal.infrastructure.observability.metrics import fallback_counter

logger = logging.getLogger(__name__)

T = TypeVar("T")


_FARMERS_REF = [
    {"_id": "farmer1", "name": "John Doe", "email": "john@example.com", "phone": "+2348000000001"},
    {"_id": "farmer2", "name": "Jane Smith", "email": "jane@example.com", "phone": "+2348000000002"},
    {"_id": "farmer3", "name": "Mike Johnson", "email": "mike@example.com", "phone": "+2348000000003"},
]

DEMO_DATA: Dict[str, Any] = {
    "commissions": [
        {
            "_id": "1",
            "farmer": _FARMERS_REF[0],
            "order": {"_id": "order1", "orderNumber": "ORD001", "total": 50000, "status": "completed"},
            "amount": 2500,
            "rate": 0.05,
            "status": "paid",
            "orderAmount": 50000,
            "orderDate": "2024-01-20T00:00:00Z",
            "paidAt": "2024-01-25T00:00:00Z",
        },
        {
            "_id": "2",
            "farmer": _FARMERS_REF[1],
            "order": {"_id": "order2", "orderNumber": "ORD002", "total": 35000, "status": "completed"},
            "amount": 1750,
            "rate": 0.05,
            "status": "pending",
            "orderAmount": 35000,
            "orderDate": "2024-01-18T00:00:00Z",
        },
        {
            "_id": "3",
            "farmer": _FARMERS_REF[2],
            "order": {"_id": "order3", "orderNumber": "ORD003", "total": 42000, "status": "completed"},
            "amount": 2100,
            "rate": 0.05,
            "status": "approved",
            "orderAmount": 42000,
            "orderDate": "2024-01-15T00:00:00Z",
        },
    ],
    "commission_stats": {
        "totalCommissions": 156,
        "totalAmount": 285000,
        "statusBreakdown": [
            {"_id": "pending", "count": 12, "totalAmount": 17500},
            {"_id": "approved", "count": 8, "totalAmount": 12000},
            {"_id": "paid", "count": 136, "totalAmount": 255500},
        ],
        "averageCommission": 1827,
    },
    "commission_summary": {
        "summary": {
            "totalCommissions": 156,
            "pendingCommissions": 12,
            "paidCommissions": 136,
            "totalAmount": 285000,
            "pendingAmount": 17500,
            "paidAmount": 255500,
        },
    },
    "farmers": [
        {**_FARMERS_REF[0], "location": "Kaduna", "status": "active", "joinedAt": "2024-01-05T00:00:00Z",
         "totalHarvests": 12, "totalEarnings": 450000},
        {**_FARMERS_REF[1], "location": "Kano", "status": "active", "joinedAt": "2024-02-11T00:00:00Z",
         "totalHarvests": 7, "totalEarnings": 210000},
        {**_FARMERS_REF[2], "location": "Oyo", "status": "inactive", "joinedAt": "2024-03-02T00:00:00Z",
         "totalHarvests": 2, "totalEarnings": 38000},
    ],
    "referrals": [
        {"_id": "ref1", "farmer": _FARMERS_REF[0], "commissionRate": 0.05, "status": "completed",
         "notes": "Rice cooperative lead", "createdAt": "2024-01-02T00:00:00Z", "commission": 2500},
        {"_id": "ref2", "farmer": _FARMERS_REF[1], "commissionRate": 0.05, "status": "active",
         "notes": "", "createdAt": "2024-02-10T00:00:00Z"},
        {"_id": "ref3", "farmer": _FARMERS_REF[2], "commissionRate": 0.05, "status": "pending",
         "notes": "Awaiting first harvest", "createdAt": "2024-03-01T00:00:00Z"},
    ],
    "listings": [
        {"_id": "listing1", "cropName": "Rice", "price": 50000, "quantity": 20, "unit": "bags",
         "category": "grains", "location": "Kaduna", "farmer": _FARMERS_REF[0]},
        {"_id": "listing2", "cropName": "Maize", "price": 35000, "quantity": 40, "unit": "bags",
         "category": "grains", "location": "Kano", "farmer": _FARMERS_REF[1]},
        {"_id": "listing3", "cropName": "Cassava", "price": 42000, "quantity": 15, "unit": "tons",
         "category": "tubers", "location": "Oyo", "farmer": _FARMERS_REF[2]},
    ],
    "orders": [],
    "credit_score": {"score": 680, "history": [], "factors": {}, "recommendations": []},
}


class DataProvider(ABC):
    """Decides what a page shows when its backend read fails"""

    @abstractmethod
    def fallback(self, resource: str, error: DomainException) -> Any:
        """Return substitute raw data for `resource` or raise"""

    async def read(
        self,
        resource: str,
        fetch: Callable[[], Awaitable[T]],
        parse: Callable[[Any], T],
    ) -> T:
        """
        Run a backend read, consulting `fallback` if it fails.

        `parse` turns the provider's raw documents into the same shape
        `fetch` returns.
        """
        try:
            return await fetch()
        except (ApiTransportError, ApiResponseError) as e:
            logger.error(f"Failed to load {resource}: {e}", extra={"resource": resource})
            return parse(self.fallback(resource, e))


class DemoDataProvider(DataProvider):
    """Answers failed reads with canned demo data"""

    def __init__(self, data: Dict[str, Any] | None = None):
        self.data = DEMO_DATA if data is None else data

    def fallback(self, resource: str, error: DomainException) -> Any:
        if resource not in self.data:
            raise error
        logger.warning(
            "Backend read failed, serving demo data",
            extra={"resource": resource, "error": str(error)},
        )
        fallback_counter.labels(resource=resource).inc()
        return self.data[resource]


class StrictDataProvider(DataProvider):
    """Never substitutes data; the backend error propagates"""

    def fallback(self, resource: str, error: DomainException) -> Any:
        raise error


def get_data_provider(mode: str | None = None) -> DataProvider:
    mode = mode or settings.data_provider
    if mode == "strict":
        return StrictDataProvider()
    return DemoDataProvider()
