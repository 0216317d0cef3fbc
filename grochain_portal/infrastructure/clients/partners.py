"""Partner-facing endpoints: commissions, farmers and referrals"""

from typing import Any, Dict, List, Optional

from grochain_portal.domain.models import Commission, Farmer, Referral
from grochain_portal.infrastructure.clients.http import GroChainClient
from grochain_portal.infrastructure.clients.parsers import (
    parse_commission,
    parse_farmer,
    parse_referral,
    unwrap_list,
)


class PartnerAPI:
    """Client for commission, farmer and referral resources"""

    def __init__(self, client: GroChainClient):
        self.client = client

    async def list_commissions(self, filters: Optional[Dict[str, Any]] = None) -> List[Commission]:
        data = await self.client.get("/api/commissions", name="commissions.list", params=filters)
        return [parse_commission(doc) for doc in unwrap_list(data, "commissions")]

    async def get_commission(self, commission_id: str) -> Commission:
        data = await self.client.get(f"/api/commissions/{commission_id}", name="commissions.get")
        return parse_commission(data)

    async def commission_stats(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.client.get("/api/commissions/stats", name="commissions.stats", params=filters)

    async def partner_commission_summary(self, partner_id: str) -> Dict[str, Any]:
        return await self.client.get(f"/api/commissions/summary/{partner_id}", name="commissions.summary")

    async def update_commission_status(self, commission_id: str, status: str, notes: str | None = None) -> Commission:
        data = await self.client.put(
            f"/api/commissions/{commission_id}/status",
            name="commissions.update_status",
            json={"status": status, "notes": notes},
        )
        return parse_commission(data)

    async def process_payout(
        self,
        commission_ids: List[str],
        payout_method: str = "bank_transfer",
        payout_details: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Request payout of approved commissions"""
        return await self.client.post(
            "/api/commissions/payout",
            name="commissions.payout",
            json={
                "commissionIds": commission_ids,
                "payoutMethod": payout_method,
                "payoutDetails": payout_details or {},
            },
        )

    async def list_farmers(self, filters: Optional[Dict[str, Any]] = None) -> List[Farmer]:
        data = await self.client.get("/api/farmers", name="farmers.list", params=filters)
        return [parse_farmer(doc) for doc in unwrap_list(data, "farmers")]

    async def list_referrals(self, filters: Optional[Dict[str, Any]] = None) -> List[Referral]:
        data = await self.client.get("/api/referrals", name="referrals.list", params=filters)
        return [parse_referral(doc) for doc in unwrap_list(data, "referrals")]

    async def complete_referral(self, farmer_id: str) -> Any:
        return await self.client.post(f"/api/referrals/{farmer_id}/complete", name="referrals.complete")
