"""Loan estimate, loan application and credit score endpoints"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from grochain_portal.api.dependencies import get_fintech_api, get_page_data, get_request_id
from grochain_portal.api.v1.schemas import (
    CreditScoreResponse,
    LoanApplicationRequest,
    LoanEstimateRequest,
    LoanEstimateResponse,
    LoanReferralRequest,
)
from grochain_portal.config import settings
from grochain_portal.domain.credit import score_band
from grochain_portal.domain.exceptions import ValidationError
from grochain_portal.domain.loans import (
    ELIGIBILITY_COLORS,
    ELIGIBILITY_LABELS,
    debt_to_income,
    loan_eligibility,
    monthly_payment,
    total_interest,
    validate_loan_application,
)
from grochain_portal.domain.models import LoanApplication
from grochain_portal.infrastructure.clients.fintech import FintechAPI
from grochain_portal.services.pages import PageDataService

router = APIRouter()


def _terms_for(form: str, requested_term: int) -> tuple[float, int]:
    """Rate and term quoted by each loan form"""
    if form == "quick":
        return settings.loan_form_rate, settings.loan_form_term_months
    return settings.loan_application_rate, requested_term


@router.post("/loans/estimate", response_model=LoanEstimateResponse)
def estimate_loan(body: LoanEstimateRequest):
    """
    Repayment estimate and eligibility shown beside the loan forms.

    The application page rounds the monthly payment to whole naira; the quick
    form shows the exact figure.
    """
    rate, term = _terms_for(body.form, body.term)
    rounded = body.form == "application"
    payment = monthly_payment(body.amount, term, rate, rounded=rounded)
    interest = total_interest(body.amount, term, rate)
    eligibility = loan_eligibility(
        body.amount, term, body.monthly_income, body.existing_loans, rate, rounded=rounded
    )

    return LoanEstimateResponse(
        annual_rate=rate,
        term=term,
        monthly_payment=payment,
        total_interest=interest,
        total_repayment=body.amount + interest,
        debt_to_income=debt_to_income(payment, body.existing_loans, body.monthly_income),
        eligibility=eligibility,
        eligibility_label=ELIGIBILITY_LABELS[eligibility],
        eligibility_color=ELIGIBILITY_COLORS[eligibility],
    )


@router.post("/loans", status_code=201)
async def submit_loan_application(
    body: LoanApplicationRequest,
    request: Request,
    api: FintechAPI = Depends(get_fintech_api),
) -> Dict[str, Any]:
    application = LoanApplication(**body.model_dump(exclude={"form"}))
    if body.form == "quick":
        application.term = settings.loan_form_term_months

    errors = validate_loan_application(
        application,
        form=body.form,
        min_amount=settings.loan_min_amount,
        max_amount=settings.loan_max_amount,
    )
    if errors:
        raise ValidationError(errors)

    result = await api.create_loan_application(application)
    logging.info(
        "Loan application submitted",
        extra={"request_id": get_request_id(request), "amount": application.amount, "term": application.term},
    )
    return {"success": True, "data": result}


@router.post("/loans/referrals", status_code=201)
async def submit_loan_referral(
    body: LoanReferralRequest,
    api: FintechAPI = Depends(get_fintech_api),
) -> Dict[str, Any]:
    result = await api.create_loan_referral(
        body.farmer_id, body.loan_amount, body.purpose, body.term, body.description
    )
    return {"success": True, "data": result}


@router.get("/credit-score/{user_id}", response_model=CreditScoreResponse)
async def get_credit_score(user_id: str, pages: PageDataService = Depends(get_page_data)):
    credit = await pages.credit_score(user_id)
    band = score_band(credit.score)

    return CreditScoreResponse(
        user_id=user_id,
        score=credit.score,
        rating=band.rating,
        color=band.text_color,
        range_min=band.min_score,
        range_max=band.max_score,
        range_color=band.bar_color,
        history=credit.history,
        recommendations=credit.recommendations,
        updated_at=credit.updated_at,
    )
