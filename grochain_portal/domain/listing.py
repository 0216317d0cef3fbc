"""Client-side list filtering, pagination and derived subsets"""

import math
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from grochain_portal.domain.models import Commission, Farmer, Order, Page, Referral
from grochain_portal.utils.date_utils import range_start

T = TypeVar("T")
Predicate = Callable[[Any], bool]

ALL = "all"

COMMISSION_STATUS_COLORS: Dict[str, str] = {
    "pending": "bg-yellow-100 text-yellow-800",
    "approved": "bg-blue-100 text-blue-800",
    "paid": "bg-green-100 text-green-800",
    "cancelled": "bg-red-100 text-red-800",
}


def paginate(
    predicate: Optional[Callable[[T], bool]],
    items: Iterable[T],
    page: int,
    page_size: int,
) -> Page[T]:
    """
    Filter items then cut out one page, keeping the backend's order.

    Pages past the end are empty rather than an error.
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    filtered = [item for item in items if predicate is None or predicate(item)]
    start = (page - 1) * page_size

    return Page(
        items=filtered[start:start + page_size],
        page=page,
        page_size=page_size,
        total_items=len(filtered),
        total_pages=max(math.ceil(len(filtered) / page_size), 1),
    )


def contains_text(term: Optional[str], *fields: Optional[str]) -> bool:
    """Case-insensitive substring match on any field; an empty term matches"""
    if not term:
        return True
    needle = term.lower()
    return any(needle in (value or "").lower() for value in fields)


def _matches_choice(selected: Optional[str], value: Optional[str]) -> bool:
    return not selected or selected == ALL or selected == value


def all_of(*predicates: Predicate) -> Predicate:
    return lambda item: all(p(item) for p in predicates)


def farmer_filter(search: str = "", status: str = ALL, location: str = ALL) -> Predicate:
    """Farmers page: search name/email/phone, exact status and location"""

    def predicate(farmer: Farmer) -> bool:
        return (
            contains_text(search, farmer.name, farmer.email, farmer.phone)
            and _matches_choice(status, farmer.status)
            and _matches_choice(location, farmer.location)
        )

    return predicate


def referral_filter(search: str = "", status: str = ALL) -> Predicate:
    """Referrals page: search the referred farmer's name/email"""

    def predicate(referral: Referral) -> bool:
        return contains_text(search, referral.farmer.name, referral.farmer.email) and _matches_choice(
            status, referral.status
        )

    return predicate


def commission_filter(search: str = "", status: str = ALL) -> Predicate:
    """Commissions page: search farmer name and order number"""

    def predicate(commission: Commission) -> bool:
        return contains_text(
            search, commission.farmer.name, commission.order.order_number
        ) and _matches_choice(status, commission.status)

    return predicate


def order_filter(
    search: str = "",
    status: str = ALL,
    payment_status: str = ALL,
    date_range: str = ALL,
    tab: str = ALL,
    today: Optional[date] = None,
) -> Predicate:
    """
    Buyer orders page.

    Search covers order number, item crop names and seller name. Date ranges
    are relative to `today` (defaults to the current date).
    """
    today = today or date.today()
    since = range_start(date_range, today)

    def in_range(order: Order) -> bool:
        if since is None:
            return True
        if order.created_at is None:
            return False
        created = order.created_at.date()
        return created == today if date_range == "today" else created >= since

    def predicate(order: Order) -> bool:
        seller_name = order.seller.name if order.seller else ""
        return (
            _matches_choice(tab, order.status)
            and _matches_choice(status, order.status)
            and _matches_choice(payment_status, order.payment_status)
            and in_range(order)
            and contains_text(search, order.order_number, seller_name, *(i.crop_name for i in order.items))
        )

    return predicate


@dataclass(frozen=True)
class ListQuery:
    """
    Filter state of a list page.

    Any filter change sends the user back to page 1; moving between pages
    keeps the filters.
    """

    filters: Dict[str, str] = field(default_factory=dict)
    page: int = 1
    page_size: int = 10

    def with_filters(self, **changes: str) -> "ListQuery":
        merged = {**self.filters, **changes}
        if merged == self.filters:
            return self
        return replace(self, filters=merged, page=1)

    def with_page(self, page: int) -> "ListQuery":
        return replace(self, page=page)

    def apply(self, predicate_factory: Callable[..., Predicate], items: Iterable[T]) -> Page[T]:
        return paginate(predicate_factory(**self.filters), items, self.page, self.page_size)


def by_status(items: Iterable[T], status: str) -> List[T]:
    return [item for item in items if getattr(item, "status", None) == status]


def pending_commissions(commissions: Iterable[Commission]) -> List[Commission]:
    return by_status(commissions, "pending")


def paid_commissions(commissions: Iterable[Commission]) -> List[Commission]:
    return by_status(commissions, "paid")


def active_referrals(referrals: Iterable[Referral]) -> List[Referral]:
    return by_status(referrals, "active")


def active_farmers(farmers: Iterable[Farmer]) -> List[Farmer]:
    return by_status(farmers, "active")


def status_counts(items: Iterable[Any]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for item in items:
        counts[item.status] = counts.get(item.status, 0) + 1
    return counts


def commission_summary(commissions: List[Commission]) -> Dict[str, float]:
    """Totals shown in the commissions dashboard header"""
    pending = pending_commissions(commissions)
    paid = paid_commissions(commissions)
    return {
        "total_commissions": len(commissions),
        "pending_commissions": len(pending),
        "paid_commissions": len(paid),
        "total_amount": sum(c.amount for c in commissions),
        "pending_amount": sum(c.amount for c in pending),
        "paid_amount": sum(c.amount for c in paid),
    }


def order_stats(orders: List[Order]) -> Dict[str, float]:
    """Counts by fulfilment status plus total spent on paid orders"""
    counts = status_counts(orders)
    return {
        "total": len(orders),
        "pending": counts.get("pending", 0),
        "processing": counts.get("processing", 0),
        "shipped": counts.get("shipped", 0),
        "delivered": counts.get("delivered", 0),
        "total_spent": sum(o.total_amount for o in orders if o.payment_status == "paid"),
    }


def commission_status_color(status: str) -> str:
    return COMMISSION_STATUS_COLORS.get(status, "bg-gray-100 text-gray-800")
