"""
Export Schemas - day summaries, export documents and API payloads
"""
from typing import Dict, List, Optional
from pydantic import BaseModel

from absenofc.schemas.transaksi import LogEntry


class DaySummary(BaseModel):
    """One row per (nik, tanggal); empty strings mark absent values"""
    nik: str
    nama: str = ""
    kantor: str = ""
    tanggal: str = ""
    jam_masuk: str = ""
    jam_pulang: str = ""
    jam_izin: str = ""
    waktu_kerja: str = ""


class ExportDocument(BaseModel):
    filename: str
    content: str
    rows: int = 0

    def encode(self) -> bytes:
        return self.content.encode("utf-8")


class BulkExportRequest(BaseModel):
    """Request schema for bulk export endpoint"""
    base_name: Optional[str] = None


class BulkExportResult(BaseModel):
    """Response schema for bulk export endpoint"""
    directory: str
    files: List[str]
    count: int


class LogActivityResponse(BaseModel):
    """Response schema for log activity listing"""
    total: int
    status_counts: Dict[str, int]
    kantor_counts: Dict[str, int]
    groups: Dict[str, List[LogEntry]]
