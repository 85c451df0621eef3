"""
Export Endpoints - filtered CSV download and bulk per-user export
"""
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from absenofc.api.deps import get_backend, export_timezone
from absenofc.core.backend import BackendClient
from absenofc.core.config import settings
from absenofc.services.export_service import ExportService
from absenofc.services.bulk_export_service import BulkExportService
from absenofc.services.emission_queue import DirectorySink
from absenofc.schemas import DataResponse, BulkExportRequest, BulkExportResult

router = APIRouter()
export_service = ExportService(
    tz=export_timezone(),
    date_format=settings.EXPORT_DATE_FORMAT,
    default_name=settings.DEFAULT_EXPORT_NAME,
    escape_quotes=settings.CSV_ESCAPE_QUOTES
)
bulk_export_service = BulkExportService(
    tz=export_timezone(),
    date_format=settings.EXPORT_DATE_FORMAT,
    delay_ms=settings.BULK_EXPORT_DELAY_MS,
    escape_quotes=settings.CSV_ESCAPE_QUOTES
)


@router.get(
    "/log-activity",
    status_code=status.HTTP_200_OK,
    response_class=Response
)
async def export_log_activity(
    status: str = Query("All", description="Filter by status name"),
    kantor: str = Query("All", description="Filter by kantor name"),
    search: str = Query("", description="Search by nama or NIK"),
    name: str = Query("", description="File name without .csv (default from settings)"),
    with_work_duration: bool = Query(False, description="Add the Waktu Kerja column"),
    client: BackendClient = Depends(get_backend)
):
    """
    Download the filtered Log Activity as CSV

    **Format:**
    - UTF-8 with BOM, semicolon-delimited, every field double-quoted
    - One row per NIK per day with the earliest Masuk/Pulang/Izin times
    """
    document = export_service.export_filtered(
        client,
        status=status,
        kantor=kantor,
        search=search,
        name=name,
        with_work_duration=with_work_duration
    )

    return Response(
        content=document.encode(),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'}
    )


@router.post(
    "/bulk",
    response_model=DataResponse[BulkExportResult],
    status_code=status.HTTP_200_OK
)
async def export_bulk(
    request: BulkExportRequest,
    client: BackendClient = Depends(get_backend)
):
    """
    Export every user's attendance to its own CSV file

    **Process:**
    1. Reject the request when base_name is missing (nothing is written)
    2. Merge the user roster with NIKs that only appear in transactions
    3. Write <base_name>_<nik>_<nama>.csv per user into EXPORT_DIR,
       pausing BULK_EXPORT_DELAY_MS between files

    **Errors:**
    - 400: base_name missing, or base_name or a NIK containing path separators
    """
    files = await bulk_export_service.export_all(
        client,
        request.base_name,
        DirectorySink(settings.EXPORT_DIR)
    )

    return DataResponse(
        success=True,
        message="Bulk export completed",
        data=BulkExportResult(directory=settings.EXPORT_DIR, files=files, count=len(files))
    )
