"""
Dashboard Schemas - per-kantor attendance for one day
"""
from datetime import date
from typing import List
from pydantic import BaseModel


class KantorActivity(BaseModel):
    idkantor: str = ""
    namakantor: str = ""
    active_today: int = 0
    total_users: int = 0


class DashboardResponse(BaseModel):
    """Response schema for dashboard endpoint"""
    tanggal: date
    kantors: List[KantorActivity]
