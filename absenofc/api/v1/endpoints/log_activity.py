"""
Log Activity Endpoints - filtered transaction listing and filter sources
"""
from typing import List

from fastapi import APIRouter, Depends, Query, status

from absenofc.api.deps import get_backend, export_timezone
from absenofc.core.backend import BackendClient
from absenofc.core.config import settings
from absenofc.services.log_activity_service import LogActivityService
from absenofc.schemas import DataResponse, LogActivityResponse, Kantor, Status

router = APIRouter()
log_activity_service = LogActivityService(
    tz=export_timezone(),
    date_format=settings.EXPORT_DATE_FORMAT
)


@router.get(
    "/",
    response_model=DataResponse[LogActivityResponse],
    status_code=status.HTTP_200_OK
)
async def get_log_activity(
    status: str = Query("All", description="Filter by status name (case-insensitive)"),
    kantor: str = Query("All", description="Filter by kantor name (case-insensitive)"),
    search: str = Query("", description="Search by nama or NIK"),
    client: BackendClient = Depends(get_backend)
):
    """
    Get attendance transactions grouped per day

    **Response:**
    - groups: transactions keyed by date, in backend order
    - status_counts: per status, over all transactions
    - kantor_counts: per kantor, over the status-filtered transactions
    """
    activity = log_activity_service.get_log_activity(
        client, status=status, kantor=kantor, search=search
    )

    return DataResponse(
        success=True,
        message="Log activity retrieved successfully",
        data=activity
    )


@router.get(
    "/statuses",
    response_model=DataResponse[List[Status]],
    status_code=status.HTTP_200_OK
)
async def list_statuses(client: BackendClient = Depends(get_backend)):
    """Get status names available for filtering"""
    return DataResponse(
        success=True,
        message="Statuses retrieved successfully",
        data=log_activity_service.list_statuses(client)
    )


@router.get(
    "/kantors",
    response_model=DataResponse[List[Kantor]],
    status_code=status.HTTP_200_OK
)
async def list_kantors(client: BackendClient = Depends(get_backend)):
    """Get kantor names available for filtering"""
    return DataResponse(
        success=True,
        message="Kantors retrieved successfully",
        data=log_activity_service.list_kantors(client)
    )
