"""Fintech endpoints: credit score, loan applications and loan referrals"""

from dataclasses import asdict
from typing import Any, Dict

from grochain_portal.domain.models import CreditScore, LoanApplication
from grochain_portal.infrastructure.clients.http import GroChainClient
from grochain_portal.infrastructure.clients.parsers import parse_credit_score


class FintechAPI:
    """Client for credit and lending resources"""

    def __init__(self, client: GroChainClient):
        self.client = client

    async def credit_score(self, user_id: str) -> CreditScore:
        data = await self.client.get(f"/api/fintech/credit-score/{user_id}", name="fintech.credit_score")
        return parse_credit_score(data)

    async def create_loan_application(self, application: LoanApplication) -> Dict[str, Any]:
        payload = asdict(application)
        return await self.client.post(
            "/api/loans",
            name="loans.create",
            json={
                "amount": payload["amount"],
                "purpose": payload["purpose"],
                "term": payload["term"],
                "description": payload["description"],
            },
        )

    async def create_loan_referral(
        self,
        farmer_id: str,
        loan_amount: float,
        purpose: str,
        term: int,
        description: str | None = None,
    ) -> Dict[str, Any]:
        """Partner refers one of their farmers to a lender"""
        return await self.client.post(
            "/api/fintech/loan-referrals",
            name="fintech.loan_referral",
            json={
                "farmerId": farmer_id,
                "loanAmount": loan_amount,
                "purpose": purpose,
                "term": term,
                "description": description,
            },
        )
