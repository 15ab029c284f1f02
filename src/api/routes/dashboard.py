"""Business and fleet dashboard endpoints."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_build_dashboard_use_case, get_build_fleet_metrics_use_case
from src.application.dto.responses import DashboardResponse, FleetMetricsResponse
from src.application.use_cases import BuildDashboardUseCase, BuildFleetMetricsUseCase

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    use_case: BuildDashboardUseCase = Depends(get_build_dashboard_use_case),
) -> DashboardResponse:
    """Current-month KPIs, top customers, balances and recent activity."""
    return DashboardResponse.from_entity(await use_case.execute())


@router.get("/vehicle-finances/dashboard", response_model=FleetMetricsResponse)
async def get_fleet_dashboard(
    use_case: BuildFleetMetricsUseCase = Depends(get_build_fleet_metrics_use_case),
) -> FleetMetricsResponse:
    """Fleet-wide revenue, expenses and vehicle rankings."""
    return FleetMetricsResponse.from_entity(await use_case.execute())
