from .log_activity_service import LogActivityService
from .export_service import ExportService
from .bulk_export_service import BulkExportService
from .emission_queue import EmissionQueue, DirectorySink
from .dashboard_service import DashboardService
from .user_directory_service import UserDirectoryService

__all__ = [
    "LogActivityService",
    "ExportService",
    "BulkExportService",
    "EmissionQueue",
    "DirectorySink",
    "DashboardService",
    "UserDirectoryService"
]
