"""
Dashboard Endpoints - per-kantor attendance overview
"""
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from absenofc.api.deps import get_backend, export_timezone
from absenofc.core.backend import BackendClient
from absenofc.services.dashboard_service import DashboardService
from absenofc.schemas import DataResponse, DashboardResponse

router = APIRouter()
dashboard_service = DashboardService(tz=export_timezone())


@router.get(
    "/",
    response_model=DataResponse[DashboardResponse],
    status_code=status.HTTP_200_OK
)
async def get_dashboard(
    tanggal: Optional[date] = Query(None, description="Day to report (default: today in EXPORT_TIMEZONE)"),
    client: BackendClient = Depends(get_backend)
):
    """
    Get attendance per kantor for one day

    **Response:**
    - active_today: distinct NIKs with a Masuk or Izin on that day
    - total_users: users assigned to the kantor
    """
    day = tanggal or datetime.now(export_timezone()).date()

    return DataResponse(
        success=True,
        message="Dashboard retrieved successfully",
        data=dashboard_service.get_dashboard(client, day)
    )
