"""User repository."""

import uuid
from typing import Dict, Iterable

from src.core.bases.base_repository import BaseRepository
from src.apps.accounts.models.user import User


class UserRepository(BaseRepository[User]):
    """User repository class."""

    model = User

    async def get_by_email(self, email: str):
        return await self.get_one(email=email)

    async def get_by_username(self, username: str):
        return await self.get_one(username=username)

    async def get_usernames(self, user_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, str]:
        users = await self.get_many_by_ids(list(set(user_ids)))
        return {user.id: user.username for user in users}
