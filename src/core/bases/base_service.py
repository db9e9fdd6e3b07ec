from typing import Any, Awaitable, Dict, Generic, List, Optional, TypeVar

from sqlmodel import SQLModel

from src.core import exceptions
from src.core.bases.base_repository import BaseRepository, IntegrityRepositoryError, RepositoryError
from src.core.logger import get_logger
from src.core.response.schemas import PaginatedResponse

T = TypeVar("T", bound=SQLModel)
R = TypeVar("R")

logger = get_logger("services")


class BaseService(Generic[T]):
    """Base service: wraps a repository and turns its failures into app exceptions.

    Public methods return ``{"data": ..., "message": ...}`` dictionaries that the
    routers hand straight to the response helpers.
    """

    not_found_message = "Item not found"

    def __init__(self, repository: BaseRepository[T]):
        self.repository = repository

    async def _call(self, awaitable: Awaitable[R], operation: str) -> R:
        """Await a repository call, mapping repository errors to service errors."""
        try:
            return await awaitable
        except IntegrityRepositoryError as e:
            logger.warning("Integrity error during %s: %s", operation, e)
            raise exceptions.ConflictException(f"Conflict during {operation}") from e
        except RepositoryError as e:
            logger.error("Repository error during %s: %s", operation, e)
            raise exceptions.ServiceException(f"Error during {operation}") from e

    async def _get_or_404(self, item_id: Any) -> T:
        item = await self._call(self.repository.get(item_id), "get")
        if item is None:
            raise exceptions.NotFoundException(self.not_found_message)
        return item

    @staticmethod
    def _page(
        result: PaginatedResponse, items: Optional[List[Any]] = None, message: str = ""
    ) -> Dict[str, Any]:
        return {
            "items": result.data if items is None else items,
            "total": result.total,
            "page": result.page,
            "per_page": result.per_page,
            "pages": result.pages,
            "message": message or result.message,
        }

    async def _validate_create(self, create_data: Dict[str, Any]) -> None:
        """Validate data before creation."""
        pass

    async def _validate_update(
        self, item_id: Any, update_data: Dict[str, Any], existing_item: T
    ) -> None:
        """Validate data before update."""
        pass

    async def _validate_delete(self, item_id: Any, existing_item: T) -> None:
        """Validate before delete."""
        pass
