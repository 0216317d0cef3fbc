"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from grochain_portal.domain.models import (
    Commission,
    CreditHistoryEntry,
    Farmer,
    Harvest,
    Listing,
    Order,
    Page,
    Referral,
)


class Pagination(BaseModel):
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @classmethod
    def of(cls, page: Page) -> "Pagination":
        return cls(
            page=page.page,
            page_size=page.page_size,
            total_items=page.total_items,
            total_pages=page.total_pages,
        )


class CommissionSummary(BaseModel):
    total_commissions: int
    pending_commissions: int
    paid_commissions: int
    total_amount: float
    pending_amount: float
    paid_amount: float


class CommissionsResponse(BaseModel):
    """Response for GET /v1/commissions"""

    items: List[Commission]
    pagination: Pagination
    summary: CommissionSummary


class PayoutRequest(BaseModel):
    """Request body for POST /v1/commissions/payout"""

    commission_ids: List[str] = Field(..., min_length=1)
    payout_method: str = "bank_transfer"
    payout_details: Dict[str, Any] = Field(default_factory=dict)


class FarmersResponse(BaseModel):
    """Response for GET /v1/farmers"""

    items: List[Farmer]
    pagination: Pagination
    status_counts: Dict[str, int]


class ReferralsResponse(BaseModel):
    """Response for GET /v1/referrals"""

    items: List[Referral]
    pagination: Pagination
    active_count: int


class OrderStats(BaseModel):
    total: int
    pending: int
    processing: int
    shipped: int
    delivered: int
    total_spent: float


class OrdersResponse(BaseModel):
    """Response for GET /v1/orders"""

    items: List[Order]
    pagination: Pagination
    stats: OrderStats


class ListingsResponse(BaseModel):
    """Response for GET /v1/marketplace/listings"""

    items: List[Listing]
    pagination: Pagination


class SuggestionsResponse(BaseModel):
    query: str
    suggestions: List[str]


class PaymentRequest(BaseModel):
    """Request body for POST /v1/payments/initiate"""

    order_id: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    callback_url: Optional[str] = None


LoanForm = Literal["application", "quick"]


class LoanEstimateRequest(BaseModel):
    """Request body for POST /v1/loans/estimate"""

    amount: float = Field(0, ge=0)
    term: int = Field(12, ge=0, description="Months; the quick form always uses its fixed term")
    monthly_income: float = Field(0, ge=0)
    existing_loans: float = Field(0, ge=0)
    form: LoanForm = "application"


class LoanEstimateResponse(BaseModel):
    annual_rate: float
    term: int
    monthly_payment: float
    total_interest: float
    total_repayment: float
    debt_to_income: Optional[float]
    eligibility: str
    eligibility_label: str
    eligibility_color: str


class LoanApplicationRequest(BaseModel):
    """Request body for POST /v1/loans"""

    amount: float = 0
    purpose: str = ""
    term: int = 12
    description: str = ""
    collateral: str = ""
    monthly_income: float = 0
    existing_loans: float = 0
    farm_size: float = 0
    crop_type: str = ""
    form: LoanForm = "application"


class LoanReferralRequest(BaseModel):
    """Request body for POST /v1/loans/referrals"""

    farmer_id: str = Field(..., min_length=1)
    loan_amount: float = Field(..., gt=0)
    purpose: str = Field(..., min_length=1)
    term: int = Field(..., gt=0)
    description: Optional[str] = None


class CreditScoreResponse(BaseModel):
    """Response for GET /v1/credit-score/{user_id}"""

    user_id: str
    score: int
    rating: str
    color: str
    range_min: int
    range_max: int
    range_color: str
    history: List[CreditHistoryEntry]
    recommendations: List[str]
    updated_at: Optional[datetime]


class HarvestResponse(BaseModel):
    verified: bool
    harvest: Harvest


class NotifyUserRequest(BaseModel):
    """Request body for POST /v1/websocket/notify-user"""

    user_id: str = Field(..., min_length=1)
    event: str = Field(..., min_length=1)
    data: Dict[str, Any] = Field(default_factory=dict)
