"""
User Schemas for the backend user roster
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, field_validator

from absenofc.schemas.transaksi import Kantor, LogEntry, coerce_str, drop_non_object


class RoleUser(BaseModel):
    idrole: Optional[str] = None
    namarole: Optional[str] = None

    @field_validator('idrole', 'namarole', mode='before')
    @classmethod
    def coerce_fields(cls, v):
        return coerce_str(v)


class User(BaseModel):
    """Roster entry as served by GET /api/users"""
    nik: str
    nama: Optional[str] = None
    email: Optional[str] = None
    tanggallahir: Optional[str] = None
    nohp: Optional[str] = None
    fotoselfie: Optional[str] = None
    roleUser: Optional[RoleUser] = None
    kantor: Optional[Kantor] = None

    @field_validator('nik', mode='before')
    @classmethod
    def coerce_nik(cls, v):
        if v is None:
            return v
        return str(v).strip()

    @field_validator('nama', 'email', 'tanggallahir', 'nohp', 'fotoselfie', mode='before')
    @classmethod
    def coerce_fields(cls, v):
        return coerce_str(v)

    @field_validator('roleUser', 'kantor', mode='before')
    @classmethod
    def ignore_malformed_nested(cls, v):
        return drop_non_object(v)

    @property
    def namakantor(self) -> str:
        if self.kantor and self.kantor.namakantor:
            return self.kantor.namakantor
        return ""

    @property
    def idkantor(self) -> str:
        if self.kantor and self.kantor.idkantor:
            return self.kantor.idkantor
        return ""


class UserDirectoryResponse(BaseModel):
    """Response schema for user directory listing"""
    total: int
    kantor_counts: Dict[str, int]
    users: List[User]


class UserHistoryResponse(BaseModel):
    """Response schema for one user's transactions"""
    nik: str
    user: Optional[User] = None
    total: int
    transaksis: List[LogEntry]
