"""
Transaksi Schemas - backend transaction contract and the internal log event
"""
import re
from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, ValidationError, field_validator


def coerce_str(v):
    """Backend ids and names arrive as str, int or float depending on the row"""
    if v is None or isinstance(v, str):
        return v
    return str(v)


def drop_non_object(v):
    if v is None or isinstance(v, (dict, BaseModel)):
        return v
    return None


class Aksi(BaseModel):
    namaaksi: Optional[str] = None

    @field_validator('namaaksi', mode='before')
    @classmethod
    def coerce_name(cls, v):
        return coerce_str(v)


class Status(BaseModel):
    idstatus: Optional[str] = None
    namastatus: Optional[str] = None

    @field_validator('idstatus', 'namastatus', mode='before')
    @classmethod
    def coerce_fields(cls, v):
        return coerce_str(v)


class Kantor(BaseModel):
    idkantor: Optional[str] = None
    namakantor: Optional[str] = None

    @field_validator('idkantor', 'namakantor', mode='before')
    @classmethod
    def coerce_fields(cls, v):
        return coerce_str(v)


class TransaksiUser(BaseModel):
    nik: Optional[str] = None
    nama: Optional[str] = None
    kantor: Optional[Kantor] = None

    @field_validator('nik', mode='before')
    @classmethod
    def coerce_nik(cls, v):
        """NIK sometimes arrives as a number from the backend"""
        if v is None:
            return None
        return str(v).strip()

    @field_validator('nama', mode='before')
    @classmethod
    def coerce_nama(cls, v):
        return coerce_str(v)

    @field_validator('kantor', mode='before')
    @classmethod
    def ignore_malformed_kantor(cls, v):
        return drop_non_object(v)


class Transaksi(BaseModel):
    """
    Raw transaction record as served by GET /api/transaksis

    Every field is optional. An unparseable waktutransaksi becomes None so the
    record still counts in listings; the export pipeline drops it later.
    """
    idtransaksi: Optional[str] = None
    keterangan: Optional[Any] = None
    waktutransaksi: Optional[datetime] = None
    koordinat: Optional[Any] = None
    fotobukti: Optional[Any] = None
    aksi: Optional[Aksi] = None
    status: Optional[Status] = None
    user: Optional[TransaksiUser] = None

    @field_validator('idtransaksi', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return coerce_str(v)

    @field_validator('aksi', 'status', 'user', mode='before')
    @classmethod
    def ignore_malformed_nested(cls, v):
        return drop_non_object(v)

    @field_validator('waktutransaksi', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        """
        Fix timezone offsets without minutes
        Backend may return: '2025-10-01 09:17:39+07'
        Pydantic expects: '2025-10-01 09:17:39+07:00'
        """
        if isinstance(v, str):
            v = v.strip()
            if re.search(r'[+-]\d{2}$', v) and re.search(r'\d{2}:\d{2}:\d{2}', v):
                v = v + ':00'
        return v

    @field_validator('waktutransaksi', mode='wrap')
    @classmethod
    def unparseable_as_none(cls, v, handler):
        try:
            return handler(v)
        except ValidationError:
            return None


class LogEntry(BaseModel):
    """One transaction as shown in listings; nik and waktu may be missing"""
    id_transaksi: Optional[str] = None
    nik: str = ""
    nama: str = ""
    kantor: str = ""
    aksi: str = ""
    status: str = ""
    waktu: Optional[datetime] = None
    keterangan: Optional[Any] = None
    koordinat: Optional[Any] = None
    fotobukti: Optional[Any] = None


class LogEvent(LogEntry):
    """Normalized attendance event used by the export pipeline"""
    nik: str
    waktu: datetime
