import os

# atams base settings read these at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ATLAS_SSO_URL", "http://localhost")
os.environ.setdefault("ATLAS_APP_CODE", "ABSENOFC")
os.environ.setdefault("ATLAS_ENCRYPTION_KEY", "0" * 32)
os.environ.setdefault("ATLAS_ENCRYPTION_IV", "0" * 16)
os.environ.setdefault("ENCRYPTION_KEY", "0" * 32)
os.environ.setdefault("ENCRYPTION_IV", "0" * 16)

import pytest

KANTOR_IDS = {"Kantor Pusat": "1", "Cabang Bekasi": "2"}


def make_transaksi(
    idtransaksi,
    nik,
    waktu,
    aksi="Masuk",
    nama="Budi",
    kantor="Kantor Pusat",
    status="Valid",
):
    return {
        "idtransaksi": idtransaksi,
        "keterangan": "",
        "waktutransaksi": waktu,
        "koordinat": "-6.2,106.8",
        "fotobukti": f"/uploads/{idtransaksi}.jpg",
        "aksi": {"namaaksi": aksi},
        "status": {"namastatus": status},
        "user": {
            "nik": nik,
            "nama": nama,
            "kantor": {"idkantor": KANTOR_IDS.get(kantor), "namakantor": kantor},
        },
    }


def make_user(nik, nama, kantor="Kantor Pusat"):
    return {
        "nik": nik,
        "nama": nama,
        "email": f"{nik}@absenofc.id",
        "nohp": "0812",
        "roleUser": {"namarole": "Karyawan"},
        "kantor": {"idkantor": KANTOR_IDS.get(kantor), "namakantor": kantor},
    }


class FakeBackend:
    """Stands in for BackendClient, serving canned collections per path"""

    def __init__(self, collections=None, error=None):
        self.collections = collections or {}
        self.error = error
        self.calls = []

    def get_collection(self, path):
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return list(self.collections.get(path, []))

    def close(self):
        pass


@pytest.fixture
def transaksis():
    return [
        make_transaksi("t1", "123", "2024-05-01T09:10:00", aksi="Masuk", nama="Budi S."),
        make_transaksi("t2", "123", "2024-05-01T08:55:00", aksi="Masuk", nama="Budi S."),
        make_transaksi("t3", "123", "2024-05-01T17:00:00", aksi="Pulang", nama="Budi S."),
        make_transaksi("t4", "456", "2024-05-01T10:00:00", aksi="Izin", nama="Siti", kantor="Cabang Bekasi", status="Pending"),
        make_transaksi("t5", "123", "2024-05-02T08:00:00", aksi="Masuk", nama="Budi S."),
        make_transaksi("t6", "789", "2024-05-02T07:45:00", aksi="Masuk", nama="Rina", kantor="Cabang Bekasi"),
    ]


@pytest.fixture
def users():
    return [
        make_user("123", "Budi S."),
        make_user("456", "Siti", kantor="Cabang Bekasi"),
        make_user("999", "Agus"),
    ]


@pytest.fixture
def backend(transaksis, users):
    return FakeBackend({
        "/api/transaksis": transaksis,
        "/api/users": users,
        "/api/statuses": [{"idstatus": "1", "namastatus": "Valid"}, {"idstatus": "2", "namastatus": "Pending"}],
        "/api/kantors": [{"idkantor": "1", "namakantor": "Kantor Pusat"}, {"idkantor": "2", "namakantor": "Cabang Bekasi"}],
    })
