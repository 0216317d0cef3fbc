"""Unit tests for list filtering, pagination and derived subsets"""

from datetime import date, datetime, timezone

import pytest

from grochain_portal.domain.listing import (
    ListQuery,
    active_referrals,
    commission_filter,
    commission_status_color,
    commission_summary,
    contains_text,
    farmer_filter,
    order_filter,
    order_stats,
    paginate,
    pending_commissions,
    referral_filter,
    status_counts,
)
from grochain_portal.domain.models import Commission, Farmer, Order, OrderItem, OrderRef, PartyRef, Referral
from grochain_portal.utils.date_utils import range_start, shift_months


def make_farmer(i: int, **overrides) -> Farmer:
    fields = dict(
        id=f"f{i}",
        name=f"Farmer {i}",
        email=f"farmer{i}@example.com",
        phone=f"+2348000000{i:03d}",
        location="Kaduna",
        status="active",
    )
    fields.update(overrides)
    return Farmer(**fields)


def make_commission(i: int, status: str, amount: float) -> Commission:
    return Commission(
        id=f"c{i}",
        farmer=PartyRef(id=f"f{i}", name=f"Farmer {i}"),
        order=OrderRef(id=f"o{i}", order_number=f"ORD{i:03d}"),
        amount=amount,
        rate=0.05,
        status=status,
        order_amount=amount * 20,
        order_date=None,
    )


def make_order(i: int, created: datetime, status="pending", payment_status="paid", crop="Rice") -> Order:
    return Order(
        id=f"o{i}",
        order_number=f"ORD-{i:04d}",
        status=status,
        payment_status=payment_status,
        total_amount=1000 * i,
        items=[OrderItem(crop_name=crop, quantity=1, price=1000 * i)],
        seller=PartyRef(id="s1", name="Green Acres"),
        created_at=created,
    )


def test_paginate_last_partial_page():
    """23 items, 10 per page: page 3 holds the remaining 3"""
    items = list(range(23))

    page = paginate(None, items, page=3, page_size=10)

    assert page.items == [20, 21, 22]
    assert page.total_items == 23
    assert page.total_pages == 3


def test_paginate_preserves_backend_order():
    items = ["c", "a", "b", "d"]
    page = paginate(lambda x: x != "a", items, page=1, page_size=10)
    assert page.items == ["c", "b", "d"]


def test_paginate_past_end_is_empty():
    page = paginate(None, list(range(5)), page=4, page_size=10)
    assert page.items == []
    assert page.total_pages == 1


def test_paginate_empty_list_has_one_page():
    page = paginate(None, [], page=1, page_size=10)
    assert page.items == []
    assert page.total_pages == 1


@pytest.mark.parametrize("page,page_size", [(0, 10), (1, 0), (-1, 5)])
def test_paginate_rejects_invalid_bounds(page, page_size):
    with pytest.raises(ValueError):
        paginate(None, [1, 2, 3], page=page, page_size=page_size)


def test_contains_text_case_insensitive():
    assert contains_text("RICE", "Brown rice", None)
    assert contains_text("", "anything")
    assert contains_text(None)
    assert not contains_text("yam", "Rice", "Maize")


def test_farmer_search_matches_name_email_phone():
    farmers = [
        make_farmer(1, name="Amina Bello"),
        make_farmer(2, email="GreenAcres@Farm.NG"),
        make_farmer(3, phone="+2348031234567"),
        make_farmer(4),
    ]

    assert [f.id for f in filter(farmer_filter(search="amina"), farmers)] == ["f1"]
    assert [f.id for f in filter(farmer_filter(search="greenacres@farm"), farmers)] == ["f2"]
    assert [f.id for f in filter(farmer_filter(search="803123"), farmers)] == ["f3"]


def test_farmer_empty_search_returns_list_unchanged():
    farmers = [make_farmer(i) for i in range(5)]
    page = paginate(farmer_filter(search=""), farmers, page=1, page_size=10)
    assert page.items == farmers


def test_farmer_status_and_location_filters():
    farmers = [
        make_farmer(1, status="active", location="Kano"),
        make_farmer(2, status="suspended", location="Kano"),
        make_farmer(3, status="active", location="Oyo"),
    ]

    result = list(filter(farmer_filter(status="active", location="Kano"), farmers))
    assert [f.id for f in result] == ["f1"]

    result = list(filter(farmer_filter(status="all", location="Kano"), farmers))
    assert [f.id for f in result] == ["f1", "f2"]


def test_referral_filter_searches_farmer():
    referrals = [
        Referral(id="r1", farmer=PartyRef(id="f1", name="Musa Ibrahim", email="musa@example.com"),
                 commission_rate=0.05, status="active"),
        Referral(id="r2", farmer=PartyRef(id="f2", name="Ngozi Okafor", email="ngozi@example.com"),
                 commission_rate=0.05, status="pending"),
    ]

    assert [r.id for r in filter(referral_filter(search="NGOZI"), referrals)] == ["r2"]
    assert [r.id for r in filter(referral_filter(status="active"), referrals)] == ["r1"]
    assert [r.id for r in active_referrals(referrals)] == ["r1"]


def test_commission_filter_searches_order_number():
    commissions = [make_commission(1, "paid", 100), make_commission(2, "pending", 200)]
    assert [c.id for c in filter(commission_filter(search="ord002"), commissions)] == ["c2"]


def test_commission_summary_totals():
    commissions = [
        make_commission(1, "paid", 2500),
        make_commission(2, "pending", 1750),
        make_commission(3, "approved", 2100),
        make_commission(4, "pending", 250),
    ]

    summary = commission_summary(commissions)

    assert summary["total_commissions"] == 4
    assert summary["pending_commissions"] == 2
    assert summary["paid_commissions"] == 1
    assert summary["total_amount"] == 6600
    assert summary["pending_amount"] == 2000
    assert summary["paid_amount"] == 2500
    assert [c.id for c in pending_commissions(commissions)] == ["c2", "c4"]


def test_commission_status_color_default():
    assert commission_status_color("paid") == "bg-green-100 text-green-800"
    assert commission_status_color("mystery") == "bg-gray-100 text-gray-800"


def test_order_filter_search_covers_items_and_seller():
    now = datetime(2024, 6, 15, 10, tzinfo=timezone.utc)
    orders = [make_order(1, now, crop="Cassava"), make_order(2, now, crop="Rice")]

    assert [o.id for o in filter(order_filter(search="cassava"), orders)] == ["o1"]
    assert [o.id for o in filter(order_filter(search="green acres"), orders)] == ["o1", "o2"]
    assert [o.id for o in filter(order_filter(search="ord-0002"), orders)] == ["o2"]


def test_order_filter_date_ranges():
    today = date(2024, 6, 15)
    orders = [
        make_order(1, datetime(2024, 6, 15, 9)),
        make_order(2, datetime(2024, 6, 10, 9)),
        make_order(3, datetime(2024, 5, 20, 9)),
        make_order(4, datetime(2024, 2, 1, 9)),
        make_order(5, datetime(2023, 1, 1, 9)),
    ]

    def ids(range_name):
        return [o.id for o in filter(order_filter(date_range=range_name, today=today), orders)]

    assert ids("today") == ["o1"]
    assert ids("week") == ["o1", "o2"]
    assert ids("month") == ["o1", "o2", "o3"]
    assert ids("quarter") == ["o1", "o2", "o3"]
    assert ids("year") == ["o1", "o2", "o3", "o4"]
    assert ids("all") == ["o1", "o2", "o3", "o4", "o5"]


def test_order_filter_tab_and_payment_status():
    now = datetime(2024, 6, 15)
    orders = [
        make_order(1, now, status="shipped", payment_status="paid"),
        make_order(2, now, status="shipped", payment_status="pending"),
        make_order(3, now, status="delivered", payment_status="paid"),
    ]

    result = filter(order_filter(tab="shipped", payment_status="paid"), orders)
    assert [o.id for o in result] == ["o1"]


def test_order_stats_totals_paid_orders_only():
    now = datetime(2024, 6, 15)
    orders = [
        make_order(1, now, status="pending", payment_status="paid"),
        make_order(2, now, status="shipped", payment_status="pending"),
        make_order(3, now, status="delivered", payment_status="paid"),
    ]

    stats = order_stats(orders)

    assert stats["total"] == 3
    assert stats["pending"] == 1
    assert stats["shipped"] == 1
    assert stats["delivered"] == 1
    assert stats["processing"] == 0
    assert stats["total_spent"] == 4000


def test_status_counts():
    farmers = [make_farmer(1), make_farmer(2, status="inactive"), make_farmer(3)]
    assert status_counts(farmers) == {"active": 2, "inactive": 1}


def test_list_query_resets_page_on_filter_change():
    query = ListQuery(filters={"search": ""}, page=3, page_size=10)

    changed = query.with_filters(search="rice")

    assert changed.page == 1
    assert changed.filters == {"search": "rice"}


def test_list_query_keeps_page_when_filters_unchanged():
    query = ListQuery(filters={"search": "rice"}, page=3)
    assert query.with_filters(search="rice").page == 3


def test_list_query_page_change_keeps_filters():
    query = ListQuery(filters={"search": "rice", "status": "active"}).with_page(2)
    assert query.page == 2
    assert query.filters == {"search": "rice", "status": "active"}


def test_list_query_apply_paginates_filtered_items():
    farmers = [make_farmer(i, name=f"Rice Grower {i}" if i < 23 else f"Yam Grower {i}") for i in range(30)]

    query = ListQuery(page_size=10).with_filters(search="rice").with_page(3)
    page = query.apply(farmer_filter, farmers)

    assert page.total_items == 23
    assert [f.id for f in page.items] == ["f20", "f21", "f22"]


def test_shift_months_clamps_to_month_end():
    assert shift_months(date(2024, 3, 31), -1) == date(2024, 2, 29)
    assert shift_months(date(2024, 1, 15), -3) == date(2023, 10, 15)


def test_range_start_unknown_range_has_no_bound():
    assert range_start("all", date(2024, 6, 15)) is None
