from .base_repository import BaseBackendRepository
from .transaksi_repository import TransaksiRepository, StatusRepository, KantorRepository
from .user_repository import UserRepository

__all__ = [
    "BaseBackendRepository",
    "TransaksiRepository",
    "StatusRepository",
    "KantorRepository",
    "UserRepository"
]
