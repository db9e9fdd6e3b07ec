"""Post service."""

import uuid
from typing import Any, Dict, List, Optional

from src.core import exceptions
from src.core.bases.base_service import BaseService
from src.core.logger import get_logger
from src.apps.accounts.repositories.user_repository import UserRepository
from src.apps.blog.models.post import Post, Visibility
from src.apps.blog.policies.post_policy import Action, DenyReason, authorize, ensure_allowed
from src.apps.blog.repositories.post_repository import PostRepository
from src.apps.blog.schemas.post import PostAuthor, PostCreate, PostRead, PostUpdate

logger = get_logger("posts")


class PostService(BaseService[Post]):
    """Post service class.

    Every post-scoped call loads the current post, asks the access policy, and
    only then touches the store. The load and the write are separate
    statements, so a post removed in between is reported as not found.
    """

    not_found_message = "Post not found"

    def __init__(
        self,
        repository: PostRepository,
        user_repository: UserRepository,
        conceal_private_posts: bool = False,
    ):
        super().__init__(repository)
        self.repository: PostRepository = repository
        self.user_repository = user_repository
        self.conceal_private_posts = conceal_private_posts

    async def _to_read(self, posts: List[Post]) -> List[PostRead]:
        usernames = await self._call(
            self.user_repository.get_usernames(p.author_id for p in posts), "author lookup"
        )
        return [
            PostRead(
                id=p.id,
                title=p.title,
                content=p.content,
                image_url=p.image_url,
                visibility=p.visibility,
                author=PostAuthor(id=p.author_id, username=usernames.get(p.author_id)),
                created_at=p.created_at,
                updated_at=p.updated_at,
            )
            for p in posts
        ]

    def _authorize(self, action: Action, requester: Optional[uuid.UUID], post: Post, message: str) -> None:
        """Apply the policy; with concealment on, others' private posts look missing."""
        decision = authorize(action, requester, post)
        if (
            not decision
            and decision.reason == DenyReason.FORBIDDEN
            and self.conceal_private_posts
            and post.visibility != Visibility.PUBLIC
        ):
            raise exceptions.NotFoundException(self.not_found_message)
        ensure_allowed(decision, message)

    async def get_by_id(self, post_id: uuid.UUID, requester: Optional[uuid.UUID]) -> Dict[str, Any]:
        post = await self._get_or_404(post_id)

        self._authorize(Action.READ, requester, post, "Access denied. This post is private.")

        [data] = await self._to_read([post])
        return {"data": data, "message": "Post retrieved successfully"}

    async def create(self, post_in: PostCreate, requester: Optional[uuid.UUID]) -> Dict[str, Any]:
        ensure_allowed(authorize(Action.CREATE, requester))

        if not await self._call(self.user_repository.exists(requester), "create"):
            raise exceptions.UnauthenticatedException("User not found")

        create_data = post_in.model_dump()
        create_data["author_id"] = requester
        await self._validate_create(create_data)

        post = await self._call(self.repository.create(create_data), "create")
        logger.info("Post %s created by %s", post.id, requester)

        [data] = await self._to_read([post])
        return {"data": data, "message": "Post created successfully"}

    async def update(
        self, post_id: uuid.UUID, post_in: PostUpdate, requester: Optional[uuid.UUID]
    ) -> Dict[str, Any]:
        post = await self._get_or_404(post_id)
        self._authorize(Action.UPDATE, requester, post, "You are not authorized to edit this post")

        update_data = post_in.model_dump(exclude_unset=True)
        # Ownership never changes, whatever the payload says.
        update_data.pop("author_id", None)
        if not update_data:
            raise exceptions.ValidationException("No data provided for update")
        await self._validate_update(post_id, update_data, post)

        updated = await self._call(self.repository.update(post_id, update_data), "update")
        if updated is None:
            raise exceptions.NotFoundException(self.not_found_message)
        logger.info("Post %s updated by %s", post_id, requester)

        [data] = await self._to_read([updated])
        return {"data": data, "message": "Post updated successfully"}

    async def delete(self, post_id: uuid.UUID, requester: Optional[uuid.UUID]) -> Dict[str, Any]:
        post = await self._get_or_404(post_id)
        self._authorize(Action.DELETE, requester, post, "You are not authorized to delete this post")
        await self._validate_delete(post_id, post)

        deleted = await self._call(self.repository.delete(post_id), "delete")
        if not deleted:
            raise exceptions.NotFoundException(self.not_found_message)
        logger.info("Post %s deleted by %s", post_id, requester)
        return {"data": {"id": post_id}, "message": "Post deleted successfully"}

    async def get_list(self, page: int = 1, per_page: int = 10) -> Dict[str, Any]:
        """Public posts only, newest first."""
        result = await self._call(self.repository.list_public(page, per_page), "list")
        return self._page(result, await self._to_read(result.data), "Posts retrieved successfully")

    async def list_by_author(
        self, requester: Optional[uuid.UUID], page: int = 1, per_page: int = 10
    ) -> Dict[str, Any]:
        if requester is None:
            raise exceptions.UnauthenticatedException("Authentication required")
        result = await self._call(self.repository.list_by_author(requester, page, per_page), "list")
        return self._page(result, await self._to_read(result.data), "Posts retrieved successfully")
