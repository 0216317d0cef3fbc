"""Domain models - pure Python dataclasses representing GroChain entities"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class PartyRef:
    """Embedded reference to a user (farmer, buyer, seller, partner)"""

    id: str
    name: str
    email: str = ""
    phone: str = ""


@dataclass
class OrderRef:
    """Embedded reference to the order a commission was earned on"""

    id: str
    order_number: str
    total: float = 0.0
    status: str = ""


@dataclass
class Commission:
    """Fee earned by a partner on a completed order"""

    id: str
    farmer: PartyRef
    order: OrderRef
    amount: float
    rate: float
    status: str  # pending | approved | paid | cancelled
    order_amount: float
    order_date: Optional[datetime]
    paid_at: Optional[datetime] = None
    withdrawal_id: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class Farmer:
    """Farmer onboarded by a partner"""

    id: str
    name: str
    email: str
    phone: str
    location: str
    status: str  # active | inactive | suspended
    joined_at: Optional[datetime] = None
    last_activity: Optional[datetime] = None
    total_harvests: int = 0
    total_earnings: float = 0.0
    partner: Optional[str] = None


@dataclass
class Referral:
    """Link between a partner and a farmer they introduced"""

    id: str
    farmer: PartyRef
    commission_rate: float
    status: str  # pending | active | completed
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    commission: Optional[float] = None


@dataclass
class Listing:
    """Marketplace-visible harvest batch"""

    id: str
    name: str
    price: float
    quantity: float
    unit: str
    category: str
    location: str
    farmer: Optional[PartyRef] = None
    images: List[str] = field(default_factory=list)
    harvest_date: Optional[datetime] = None
    certifications: List[str] = field(default_factory=list)
    qr_code: Optional[str] = None


@dataclass
class OrderItem:
    """Single line in an order"""

    crop_name: str
    quantity: float
    price: float


@dataclass
class Order:
    """Marketplace order as seen by the buyer"""

    id: str
    order_number: str
    status: str
    payment_status: str
    total_amount: float
    items: List[OrderItem] = field(default_factory=list)
    buyer: Optional[PartyRef] = None
    seller: Optional[PartyRef] = None
    shipping_address: Optional[str] = None
    tracking_number: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class Harvest:
    """Traceable unit of produce identified by a batch ID"""

    batch_id: str
    crop_type: str
    quantity: float
    unit: str
    quality: str
    location: str
    harvest_date: Optional[datetime]
    farmer: Optional[PartyRef] = None
    images: List[str] = field(default_factory=list)
    status: str = "pending"


@dataclass
class CreditHistoryEntry:
    """Transaction contributing to a credit score"""

    transaction_id: str
    amount: float
    date: Optional[datetime]


@dataclass
class CreditScore:
    """Backend-computed trust rating, read-only on the client"""

    score: int
    history: List[CreditHistoryEntry] = field(default_factory=list)
    updated_at: Optional[datetime] = None
    factors: dict = field(default_factory=dict)
    recommendations: List[str] = field(default_factory=list)


@dataclass
class User:
    """Signed-in platform user"""

    id: str
    name: str
    email: str
    role: str
    phone: str = ""
    email_verified: bool = False
    phone_verified: bool = False
    location: Optional[str] = None


@dataclass
class LoanApplication:
    """Loan request as captured by the application forms"""

    amount: float
    purpose: str
    term: int
    description: str = ""
    collateral: str = ""
    monthly_income: float = 0.0
    existing_loans: float = 0.0
    farm_size: float = 0.0
    crop_type: str = ""


@dataclass
class ApiEnvelope:
    """`{success, data, error}` wrapper around every backend response"""

    success: bool
    data: Any = None
    error: Optional[str] = None


@dataclass
class Page(Generic[T]):
    """One page of a filtered list"""

    items: List[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int
