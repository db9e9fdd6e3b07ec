import uuid
from typing import Any, Callable, List, Optional, Type
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from src.core import exceptions
from src.core.response.handlers import app_error_response, paginated_response, success_response
from src.core.security.dependencies import get_requester, require_requester


class BaseRouter:
    """Base router class with CRUD endpoints guarded by the requester's identity.

    Reads accept anonymous callers (the service decides what they may see);
    writes require an authenticated requester before the service is called.
    """

    def __init__(
        self,
        service_dependency: Callable[..., Any],
        tags: Optional[List[str]] = None,
        prefix: str = "",
        create_schema: Optional[Type[BaseModel]] = None,
        update_schema: Optional[Type[BaseModel]] = None
    ):
        self.service_dependency = service_dependency
        self.tags = tags or [self.__class__.__name__.replace("Router", "")]
        self.prefix = prefix
        self.create_schema = create_schema
        self.update_schema = update_schema

        # Create router
        self.router = APIRouter(
            prefix=self.prefix,
            tags=self.tags, #type:ignore
        )

        # Register routes
        self._register_routes()

    def _register_routes(self) -> None:
        """Register all CRUD routes."""
        self._register_list()
        self._register_create()
        self._register_get_by_id()
        self._register_update()
        self._register_delete()

    def _register_get_by_id(self) -> None:
        """Register GET /{item_id} route."""
        @self.router.get(
            "/{item_id}",
            response_model=None,  # We'll use response handlers instead
            summary="Get item by ID",
            responses={
                200: {"description": "Item retrieved successfully"},
                400: {"description": "Malformed ID"},
                403: {"description": "Not allowed to see this item"},
                404: {"description": "Item not found"},
            }
        )
        async def get_by_id(
            item_id: uuid.UUID,
            requester: Optional[uuid.UUID] = Depends(get_requester),
            service=Depends(self.service_dependency),
        ):
            try:
                result = await service.get_by_id(item_id, requester)
                return success_response(
                    data=result["data"],
                    message=result["message"]
                )
            except exceptions.AppException as e:
                return app_error_response(e)

    def _register_list(self) -> None:
        """Register GET / route with pagination."""
        @self.router.get(
            "/",
            summary="List items",
            responses={
                200: {"description": "Items retrieved successfully"},
                500: {"description": "Internal server error"}
            }
        )
        async def list_items(
            page: int = Query(1, ge=1),
            per_page: int = Query(10, ge=1, le=100),
            service=Depends(self.service_dependency),
        ):
            try:
                result = await service.get_list(page=page, per_page=per_page)
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

    def _register_create(self) -> None:
        """Register POST / route."""
        if not self.create_schema:
            return

        @self.router.post(
            "/",
            status_code=status.HTTP_201_CREATED,
            summary="Create new item",
            responses={
                201: {"description": "Item created successfully"},
                400: {"description": "Validation error"},
                401: {"description": "Authentication required"},
            }
        )
        async def create_item(
            item_data: self.create_schema,  # type: ignore
            requester: uuid.UUID = Depends(require_requester),
            service=Depends(self.service_dependency),
        ):
            try:
                result = await service.create(item_data, requester)
                return success_response(
                    data=result["data"],
                    message=result["message"],
                    status_code=status.HTTP_201_CREATED
                )
            except exceptions.AppException as e:
                return app_error_response(e)

    def _register_update(self) -> None:
        """Register PUT /{item_id} route."""
        if not self.update_schema:
            return

        @self.router.put(
            "/{item_id}",
            summary="Update item",
            responses={
                200: {"description": "Item updated successfully"},
                400: {"description": "Validation error"},
                401: {"description": "Authentication required"},
                403: {"description": "Not the owner"},
                404: {"description": "Item not found"},
            }
        )
        async def update_item(
            item_id: uuid.UUID,
            item_data: self.update_schema,  # type: ignore
            requester: uuid.UUID = Depends(require_requester),
            service=Depends(self.service_dependency),
        ):
            try:
                result = await service.update(item_id, item_data, requester)
                return success_response(
                    data=result["data"],
                    message=result["message"]
                )
            except exceptions.AppException as e:
                return app_error_response(e)

    def _register_delete(self) -> None:
        """Register DELETE /{item_id} route (permanent delete)."""
        @self.router.delete(
            "/{item_id}",
            summary="Delete item",
            responses={
                200: {"description": "Item deleted successfully"},
                401: {"description": "Authentication required"},
                403: {"description": "Not the owner"},
                404: {"description": "Item not found"},
            }
        )
        async def delete_item(
            item_id: uuid.UUID,
            requester: uuid.UUID = Depends(require_requester),
            service=Depends(self.service_dependency),
        ):
            try:
                result = await service.delete(item_id, requester)
                return success_response(
                    data=result["data"],
                    message=result["message"]
                )
            except exceptions.AppException as e:
                return app_error_response(e)

    def get_router(self) -> APIRouter:
        """Get the FastAPI router instance."""
        return self.router
