"""Post router."""

import uuid

from fastapi import Depends, Query, Request

from src.core import exceptions
from src.core.bases.base_router import BaseRouter
from src.core.response.handlers import app_error_response, paginated_response
from src.core.security.dependencies import require_requester
from src.apps.accounts.routers.auth_router import get_user_repository
from src.apps.accounts.repositories.user_repository import UserRepository
from src.apps.blog.services.post_service import PostService
from src.apps.blog.repositories.post_repository import PostRepository
from src.apps.blog.schemas.post import PostCreate, PostUpdate


def get_post_repository(request: Request) -> PostRepository:
    """Get post repository instance."""
    return PostRepository(request.app.state.database.get_session)


def get_post_service(
    request: Request,
    repository: PostRepository = Depends(get_post_repository),
    user_repository: UserRepository = Depends(get_user_repository),
) -> PostService:
    """Get post service instance."""
    return PostService(
        repository,
        user_repository,
        conceal_private_posts=request.app.state.settings.CONCEAL_PRIVATE_POSTS,
    )


class PostRouter(BaseRouter):
    """Post router class."""

    def __init__(self):
        super().__init__(
            service_dependency=get_post_service,
            create_schema=PostCreate,
            update_schema=PostUpdate,
            prefix="/posts",
            tags=["Posts"]
        )

    def _register_routes(self) -> None:
        # Must come before /{item_id}, which would otherwise capture it.
        self._register_my_posts()
        super()._register_routes()

    def _register_my_posts(self) -> None:
        """Register GET /my-posts route."""
        @self.router.get(
            "/my-posts",
            summary="List the requester's own posts",
            responses={
                200: {"description": "Posts retrieved successfully"},
                401: {"description": "Authentication required"},
            }
        )
        async def my_posts(
            page: int = Query(1, ge=1),
            per_page: int = Query(10, ge=1, le=100),
            requester: uuid.UUID = Depends(require_requester),
            service: PostService = Depends(get_post_service),
        ):
            try:
                result = await service.list_by_author(requester, page=page, per_page=per_page)
                return paginated_response(
                    items=result["items"],
                    total=result["total"],
                    page=result["page"],
                    per_page=result["per_page"],
                    pages=result["pages"],
                    message=result["message"]
                )
            except exceptions.AppException as e:
                return app_error_response(e)


# Router instance
router = PostRouter().get_router()
