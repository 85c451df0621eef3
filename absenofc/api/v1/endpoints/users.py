"""
User Endpoints - user directory and per-user transaction history
"""
from fastapi import APIRouter, Depends, Query, status

from absenofc.api.deps import get_backend, export_timezone
from absenofc.core.backend import BackendClient
from absenofc.services.user_directory_service import UserDirectoryService
from absenofc.schemas import DataResponse, UserDirectoryResponse, UserHistoryResponse

router = APIRouter()
user_directory_service = UserDirectoryService(tz=export_timezone())


@router.get(
    "/",
    response_model=DataResponse[UserDirectoryResponse],
    status_code=status.HTTP_200_OK
)
async def get_users(
    kantor: str = Query("All", description="Filter by kantor name (case-insensitive)"),
    search: str = Query("", description="Search by nama, NIK, email or no. HP"),
    client: BackendClient = Depends(get_backend)
):
    """
    Get the user roster

    **Response:**
    - users: roster entries matching the kantor filter and search
    - kantor_counts: users per kantor, over the whole roster
    """
    return DataResponse(
        success=True,
        message="Users retrieved successfully",
        data=user_directory_service.get_directory(client, kantor=kantor, search=search)
    )


@router.get(
    "/{nik}/transaksis",
    response_model=DataResponse[UserHistoryResponse],
    status_code=status.HTTP_200_OK
)
async def get_user_transaksis(
    nik: str,
    client: BackendClient = Depends(get_backend)
):
    """
    Get one user's transactions, in backend order

    **Errors:**
    - 404: NIK unknown to both the roster and the transaction log
    """
    return DataResponse(
        success=True,
        message="User transactions retrieved successfully",
        data=user_directory_service.get_user_history(client, nik)
    )
