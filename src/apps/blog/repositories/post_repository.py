"""Post repository."""

import uuid

from src.core.bases.base_repository import BaseRepository
from src.apps.blog.models.post import Post, Visibility

NEWEST_FIRST = "-created_at"


class PostRepository(BaseRepository[Post]):
    """Post repository class."""

    model = Post

    async def list_public(self, page: int = 1, per_page: int = 10):
        return await self.list(
            page=page, per_page=per_page, order_by=NEWEST_FIRST, visibility=Visibility.PUBLIC
        )

    async def list_by_author(self, author_id: uuid.UUID, page: int = 1, per_page: int = 10):
        return await self.list(
            page=page, per_page=per_page, order_by=NEWEST_FIRST, author_id=author_id
        )
