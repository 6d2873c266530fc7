import asyncio

from pydantic import BaseModel

from krishi_setu.collections.cultivation_guide import get_cultivation_guides_from_farmer_id
from krishi_setu.collections.farm import get_farms_from_farmer_id
from krishi_setu.collections.transaction import get_transactions_from_farmer_id
from krishi_setu.models.farm import Farm, largest_farm
from krishi_setu.models.transaction import LedgerSummary
from krishi_setu.services.ledger_service import summarize_transactions
from krishi_setu.services.stage_lifecycle import is_complete


class DashboardOverview(BaseModel):
    largest_farm: Farm | None = None
    farm_count: int
    guide_count: int
    guides_in_progress: int
    ledger: LedgerSummary


async def build_dashboard_overview(farmer_id: str) -> DashboardOverview:
    farms, guides, transactions = await asyncio.gather(
        get_farms_from_farmer_id(farmer_id),
        get_cultivation_guides_from_farmer_id(farmer_id),
        get_transactions_from_farmer_id(farmer_id),
    )
    return DashboardOverview(
        largest_farm=largest_farm(farms),
        farm_count=len(farms),
        guide_count=len(guides),
        guides_in_progress=sum(1 for guide in guides if not is_complete(guide.stages)),
        ledger=summarize_transactions(transactions),
    )
