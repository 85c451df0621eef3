"""
User Repository - Data access layer for the user roster
"""
from typing import List

from absenofc.core.backend import BackendClient
from absenofc.repositories.base_repository import BaseBackendRepository
from absenofc.schemas.user import User


class UserRepository(BaseBackendRepository[User]):
    def __init__(self):
        super().__init__(User, "/api/users")

    def get_roster(self, client: BackendClient) -> List[User]:
        """Get users that carry a NIK, in backend order"""
        return [u for u in self.get_all(client) if u.nik]
