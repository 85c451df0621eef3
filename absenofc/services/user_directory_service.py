"""
User Directory Service - roster filtering and per-user transaction history
"""
import logging
from datetime import tzinfo
from typing import Dict, List, Optional

from absenofc.core.backend import BackendClient
from absenofc.repositories.transaksi_repository import TransaksiRepository
from absenofc.repositories.user_repository import UserRepository
from absenofc.schemas.user import User, UserDirectoryResponse, UserHistoryResponse
from absenofc.services.log_activity_service import ALL
from absenofc.services.log_pipeline import read_entries
from atams.exceptions import NotFoundException

logger = logging.getLogger(__name__)


def filter_users_by_kantor(users: List[User], kantor: Optional[str] = ALL) -> List[User]:
    if not kantor or kantor == ALL:
        return users
    wanted = kantor.lower()
    return [u for u in users if u.namakantor.lower() == wanted]


def search_users(users: List[User], term: Optional[str] = "") -> List[User]:
    """Case-insensitive match on nama, nik, email or nohp"""
    if not term:
        return users
    term = term.lower()
    return [
        u for u in users
        if any(term in (value or "").lower() for value in (u.nama, u.nik, u.email, u.nohp))
    ]


def count_users_by_kantor(users: List[User]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for u in users:
        if u.namakantor:
            counts[u.namakantor] = counts.get(u.namakantor, 0) + 1
    return counts


class UserDirectoryService:
    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self.tz = tz
        self.user_repo = UserRepository()
        self.transaksi_repo = TransaksiRepository()

    def get_directory(
        self,
        client: BackendClient,
        kantor: Optional[str] = ALL,
        search: Optional[str] = ""
    ) -> UserDirectoryResponse:
        """Kantor counts cover the whole roster; the user list is filtered"""
        users = self.user_repo.get_roster(client)
        filtered = search_users(filter_users_by_kantor(users, kantor), search)

        return UserDirectoryResponse(
            total=len(filtered),
            kantor_counts=count_users_by_kantor(users),
            users=filtered
        )

    def get_user_history(self, client: BackendClient, nik: str) -> UserHistoryResponse:
        """
        Get one user's profile and every transaction carrying their NIK

        Raises:
            NotFoundException: If neither the roster nor the log knows the NIK
        """
        user = next((u for u in self.user_repo.get_roster(client) if u.nik == nik), None)
        entries = [
            e for e in read_entries(self.transaksi_repo.get_transaksis(client), self.tz)
            if e.nik == nik
        ]

        if user is None and not entries:
            raise NotFoundException("User not found")

        return UserHistoryResponse(nik=nik, user=user, total=len(entries), transaksis=entries)
