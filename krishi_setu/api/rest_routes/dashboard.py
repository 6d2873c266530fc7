from fastapi import APIRouter, Depends

from krishi_setu.core.security import get_current_farmer_id
from krishi_setu.services.dashboard_service import DashboardOverview, build_dashboard_overview

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/", response_model=DashboardOverview, response_model_exclude_none=True)
async def get_dashboard(farmer_id: str = Depends(get_current_farmer_id)):
    """
    Overview cards of the dashboard home: largest farm, guide progress and ledger totals.
    """
    return await build_dashboard_overview(farmer_id)
