"""Map backend JSON documents onto domain models"""

from typing import Any, Dict, List, Optional

from grochain_portal.domain.models import (
    Commission,
    CreditHistoryEntry,
    CreditScore,
    Farmer,
    Harvest,
    Listing,
    Order,
    OrderItem,
    OrderRef,
    PartyRef,
    Referral,
    User,
)
from grochain_portal.utils.date_utils import parse_timestamp


def _id(doc: Dict[str, Any]) -> str:
    # Mongo documents expose `_id`, serialised ones `id`
    return str(doc.get("id") or doc.get("_id") or "")


def parse_party(value: Any) -> Optional[PartyRef]:
    if value is None:
        return None
    if isinstance(value, str):
        return PartyRef(id=value, name="")
    name = value.get("name") or " ".join(
        part for part in (value.get("firstName"), value.get("lastName")) if part
    )
    return PartyRef(
        id=_id(value),
        name=name,
        email=value.get("email", ""),
        phone=value.get("phone") or value.get("phoneNumber", ""),
    )


def parse_order_ref(value: Any) -> OrderRef:
    if isinstance(value, str):
        return OrderRef(id=value, order_number="")
    value = value or {}
    return OrderRef(
        id=_id(value),
        order_number=value.get("orderNumber", ""),
        total=value.get("total", 0),
        status=value.get("status", ""),
    )


def parse_commission(doc: Dict[str, Any]) -> Commission:
    return Commission(
        id=_id(doc),
        farmer=parse_party(doc.get("farmer")) or PartyRef(id="", name=""),
        order=parse_order_ref(doc.get("order")),
        amount=doc["amount"],
        rate=doc.get("rate", 0),
        status=doc["status"],
        order_amount=doc.get("orderAmount", 0),
        order_date=parse_timestamp(doc.get("orderDate")),
        paid_at=parse_timestamp(doc.get("paidAt")),
        withdrawal_id=doc.get("withdrawalId"),
        notes=doc.get("notes"),
    )


def parse_farmer(doc: Dict[str, Any]) -> Farmer:
    partner = doc.get("partner")
    if isinstance(partner, dict):
        partner = _id(partner)
    return Farmer(
        id=_id(doc),
        name=doc["name"],
        email=doc.get("email", ""),
        phone=doc.get("phone", ""),
        location=doc.get("location", ""),
        status=doc.get("status", "active"),
        joined_at=parse_timestamp(doc.get("joinedAt")),
        last_activity=parse_timestamp(doc.get("lastActivity")),
        total_harvests=doc.get("totalHarvests", 0),
        total_earnings=doc.get("totalEarnings", 0),
        partner=partner,
    )


def parse_referral(doc: Dict[str, Any]) -> Referral:
    return Referral(
        id=_id(doc),
        farmer=parse_party(doc.get("farmer")) or PartyRef(id="", name=""),
        commission_rate=doc.get("commissionRate", 0),
        status=doc["status"],
        notes=doc.get("notes") or "",
        created_at=parse_timestamp(doc.get("createdAt")),
        updated_at=parse_timestamp(doc.get("updatedAt")),
        commission=doc.get("commission"),
    )


def parse_listing(doc: Dict[str, Any]) -> Listing:
    location = doc.get("location", "")
    if isinstance(location, dict):
        location = ", ".join(str(v) for v in (location.get("city"), location.get("state")) if v)
    return Listing(
        id=_id(doc),
        name=doc.get("name") or doc.get("product") or doc.get("cropName", ""),
        price=doc.get("price", 0),
        quantity=doc.get("quantity", 0),
        unit=doc.get("unit", ""),
        category=doc.get("category", ""),
        location=location,
        farmer=parse_party(doc.get("farmer")),
        images=list(doc.get("images") or []),
        harvest_date=parse_timestamp(doc.get("harvestDate")),
        certifications=list(doc.get("certifications") or []),
        qr_code=doc.get("qrCode"),
    )


def parse_order(doc: Dict[str, Any]) -> Order:
    items = [
        OrderItem(
            crop_name=item.get("cropName") or (item.get("listing") or {}).get("cropName", ""),
            quantity=item.get("quantity", 0),
            price=item.get("price", 0),
        )
        for item in doc.get("items", [])
    ]
    return Order(
        id=_id(doc),
        order_number=doc.get("orderNumber", ""),
        status=doc.get("status", "pending"),
        payment_status=doc.get("paymentStatus", "pending"),
        total_amount=doc.get("totalAmount", doc.get("total", 0)),
        items=items,
        buyer=parse_party(doc.get("buyer")),
        seller=parse_party(doc.get("seller") or doc.get("sellerInfo")),
        shipping_address=doc.get("shippingAddress"),
        tracking_number=doc.get("trackingNumber"),
        created_at=parse_timestamp(doc.get("createdAt")),
    )


def parse_harvest(doc: Dict[str, Any]) -> Harvest:
    return Harvest(
        batch_id=doc["batchId"],
        crop_type=doc.get("cropType", ""),
        quantity=doc.get("quantity", 0),
        unit=doc.get("unit", ""),
        quality=doc.get("quality", ""),
        location=doc.get("location", ""),
        harvest_date=parse_timestamp(doc.get("harvestDate") or doc.get("date")),
        farmer=parse_party(doc.get("farmer")),
        images=list(doc.get("images") or []),
        status=doc.get("status", "pending"),
    )


def parse_credit_score(doc: Dict[str, Any]) -> CreditScore:
    history = [
        CreditHistoryEntry(
            transaction_id=entry.get("transactionId", ""),
            amount=entry.get("amount", 0),
            date=parse_timestamp(entry.get("date")),
        )
        for entry in doc.get("history", [])
    ]
    return CreditScore(
        score=int(doc["score"]),
        history=history,
        updated_at=parse_timestamp(doc.get("updatedAt") or doc.get("lastUpdated")),
        factors=doc.get("factors") or {},
        recommendations=list(doc.get("recommendations") or []),
    )


def parse_user(doc: Dict[str, Any]) -> User:
    party = parse_party(doc)
    return User(
        id=party.id,
        name=party.name,
        email=party.email,
        role=doc.get("role", ""),
        phone=party.phone,
        email_verified=doc.get("emailVerified", False),
        phone_verified=doc.get("phoneVerified", False),
        location=doc.get("location") if isinstance(doc.get("location"), str) else None,
    )


def unwrap_list(data: Any, key: str) -> List[Dict[str, Any]]:
    """Lists arrive bare or wrapped as `{key: [...], pagination: {...}}`"""
    if data is None:
        return []
    if isinstance(data, list):
        return data
    return data.get(key) or []
