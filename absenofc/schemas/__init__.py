from .transaksi import Aksi, Status, Kantor, TransaksiUser, Transaksi, LogEntry, LogEvent
from .user import User, RoleUser, UserDirectoryResponse, UserHistoryResponse
from .export import (
    DaySummary,
    ExportDocument,
    BulkExportRequest,
    BulkExportResult,
    LogActivityResponse
)
from .dashboard import KantorActivity, DashboardResponse
from .common import DataResponse

__all__ = [
    # Backend schemas
    "Aksi",
    "Status",
    "Kantor",
    "TransaksiUser",
    "Transaksi",
    "User",
    "RoleUser",
    # Pipeline schemas
    "LogEntry",
    "LogEvent",
    "DaySummary",
    "ExportDocument",
    # Request/response schemas
    "BulkExportRequest",
    "BulkExportResult",
    "LogActivityResponse",
    "KantorActivity",
    "DashboardResponse",
    "UserDirectoryResponse",
    "UserHistoryResponse",
    "DataResponse"
]
