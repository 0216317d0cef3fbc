"""Loan affordability estimates and application checks"""

from typing import Dict, Literal, Optional

from grochain_portal.domain.models import LoanApplication

Eligibility = Literal["excellent", "good", "fair", "poor", "unknown"]

ELIGIBILITY_LABELS: Dict[str, str] = {
    "excellent": "Excellent",
    "good": "Good",
    "fair": "Fair",
    "poor": "Poor",
    "unknown": "Unknown",
}

ELIGIBILITY_COLORS: Dict[str, str] = {
    "excellent": "text-emerald-600",
    "good": "text-blue-600",
    "fair": "text-amber-600",
    "poor": "text-red-600",
    "unknown": "text-gray-600",
}


def total_interest(amount: float, term: int, annual_rate: float) -> float:
    """Simple interest over the whole term"""
    if not amount or not term:
        return 0
    return amount * annual_rate * (term / 12)


def monthly_payment(amount: float, term: int, annual_rate: float, rounded: bool = True) -> float:
    """
    Estimate the monthly repayment for a simple-interest loan.

    monthly = (amount + amount * annual_rate * term/12) / term

    Example:
        500,000 over 12 months at 15% → 575,000 / 12 → 47,917
    """
    if not amount or not term:
        return 0

    payment = (amount + total_interest(amount, term, annual_rate)) / term
    # Halves round up
    return int(payment + 0.5) if rounded else payment


def debt_to_income(payment: float, existing_loans: float, monthly_income: float) -> Optional[float]:
    """Share of monthly income consumed by loan repayments"""
    if not monthly_income:
        return None
    return (payment + existing_loans) / monthly_income


def classify_debt_to_income(ratio: float) -> Eligibility:
    """
    Map a debt-to-income ratio to an eligibility tier.

    Upper bounds are inclusive: 0.30 is still "excellent".
    """
    if ratio <= 0.3:
        return "excellent"
    elif ratio <= 0.4:
        return "good"
    elif ratio <= 0.5:
        return "fair"
    else:
        return "poor"


def loan_eligibility(
    amount: float,
    term: int,
    monthly_income: float,
    existing_loans: float = 0,
    annual_rate: float = 0.15,
    rounded: bool = True,
) -> Eligibility:
    """
    Quick eligibility assessment shown beside the loan forms.

    `rounded` must match how the displayed payment is computed so the tier
    agrees with the debt-to-income ratio shown next to it.
    """
    if not monthly_income or not amount:
        return "unknown"

    payment = monthly_payment(amount, term, annual_rate, rounded=rounded)
    ratio = debt_to_income(payment, existing_loans, monthly_income)
    return classify_debt_to_income(ratio)


def validate_loan_application(
    application: LoanApplication,
    form: Literal["application", "quick"] = "application",
    min_amount: int = 50_000,
    max_amount: int = 5_000_000,
) -> Dict[str, str]:
    """
    Field-level validation before submission.

    The full application page only checks required fields. The quick form
    also enforces amount bounds and asks for farm details.

    Returns:
        Mapping of field name to message; empty when valid
    """
    errors: Dict[str, str] = {}

    if form == "application":
        if not application.amount:
            errors["amount"] = "Loan amount is required"
        if not application.purpose:
            errors["purpose"] = "Loan purpose is required"
        if not application.term:
            errors["term"] = "Loan term is required"
        return errors

    if application.amount < min_amount:
        errors["amount"] = f"Minimum loan amount is ₦{min_amount:,}"
    elif application.amount > max_amount:
        errors["amount"] = f"Maximum loan amount is ₦{max_amount:,}"
    if not application.purpose:
        errors["purpose"] = "Please select a loan purpose"
    if not application.description:
        errors["description"] = "Please provide a detailed description"
    if not application.farm_size:
        errors["farm_size"] = "Please enter your farm size"
    if not application.crop_type:
        errors["crop_type"] = "Please select a crop type"

    return errors
