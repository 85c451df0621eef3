"""
Transaksi Repository - Data access layer for attendance transactions
"""
from typing import Any, Dict, List

from absenofc.core.backend import BackendClient
from absenofc.repositories.base_repository import BaseBackendRepository
from absenofc.schemas.transaksi import Transaksi, Status, Kantor


class TransaksiRepository(BaseBackendRepository[Transaksi]):
    def __init__(self):
        super().__init__(Transaksi, "/api/transaksis")

    def get_transaksis(self, client: BackendClient) -> List[Dict[str, Any]]:
        """Raw transactions; normalization happens in the export pipeline"""
        return self.get_raw(client)


class StatusRepository(BaseBackendRepository[Status]):
    def __init__(self):
        super().__init__(Status, "/api/statuses")


class KantorRepository(BaseBackendRepository[Kantor]):
    def __init__(self):
        super().__init__(Kantor, "/api/kantors")
