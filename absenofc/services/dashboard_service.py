"""
Dashboard Service - per-kantor attendance and headcount for one day
"""
import logging
from datetime import date, tzinfo
from typing import Dict, Iterable, Optional, Set

from absenofc.core.backend import BackendClient
from absenofc.repositories.transaksi_repository import TransaksiRepository, KantorRepository
from absenofc.repositories.user_repository import UserRepository
from absenofc.schemas.transaksi import Transaksi
from absenofc.schemas.user import User
from absenofc.schemas.dashboard import KantorActivity, DashboardResponse
from absenofc.services.log_pipeline import AKSI_MASUK, AKSI_IZIN, local_time

logger = logging.getLogger(__name__)

PRESENT_AKSI = (AKSI_MASUK, AKSI_IZIN)


def count_active_by_kantor(
    transaksis: Iterable[Transaksi],
    day: date,
    tz: Optional[tzinfo] = None
) -> Dict[str, int]:
    """
    Distinct NIKs per idkantor with a Masuk or Izin on the given day

    Transactions without NIK, kantor id or a readable timestamp are ignored.
    """
    present: Dict[str, Set[str]] = {}
    for t in transaksis:
        user = t.user
        if user is None or not user.nik or user.kantor is None or not user.kantor.idkantor:
            continue
        waktu = local_time(t.waktutransaksi, tz)
        if waktu is None or waktu.date() != day:
            continue
        aksi = (t.aksi.namaaksi if t.aksi else None) or ""
        if aksi.lower() in PRESENT_AKSI:
            present.setdefault(user.kantor.idkantor, set()).add(user.nik)

    return {idkantor: len(niks) for idkantor, niks in present.items()}


def count_users_by_kantor_id(users: Iterable[User]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for user in users:
        if user.idkantor:
            counts[user.idkantor] = counts.get(user.idkantor, 0) + 1
    return counts


class DashboardService:
    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self.tz = tz
        self.transaksi_repo = TransaksiRepository()
        self.user_repo = UserRepository()
        self.kantor_repo = KantorRepository()

    def get_dashboard(self, client: BackendClient, day: date) -> DashboardResponse:
        """
        Per-kantor activity for one day

        Args:
            client: Backend client
            day: Calendar day in the export timezone

        Returns:
            DashboardResponse: One row per kantor, in backend order
        """
        active = count_active_by_kantor(self.transaksi_repo.get_all(client), day, self.tz)
        totals = count_users_by_kantor_id(self.user_repo.get_all(client))

        kantors = [
            KantorActivity(
                idkantor=k.idkantor or "",
                namakantor=k.namakantor or "",
                active_today=active.get(k.idkantor, 0),
                total_users=totals.get(k.idkantor, 0)
            )
            for k in self.kantor_repo.get_all(client)
        ]
        logger.debug("Dashboard %s: %d kantors", day.isoformat(), len(kantors))
        return DashboardResponse(tanggal=day, kantors=kantors)
