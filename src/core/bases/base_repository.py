from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar, Union
from sqlmodel import SQLModel, func, select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from pydantic import BaseModel

from src.core.response import schemas

T = TypeVar("T", bound=SQLModel)


class RepositoryError(Exception):
    """Custom exception for repository errors."""

    pass


class IntegrityRepositoryError(RepositoryError):
    """Unique or foreign-key constraint violated."""

    pass


class BaseRepository(Generic[T]):
    model: Type[T]

    def __init__(self, get_session: Callable[..., AsyncSession]):
        self.get_session = get_session

    def _handle_db_error(self, error: SQLAlchemyError, operation: str) -> None:
        """Handle database errors and raise appropriate exceptions."""
        if isinstance(error, IntegrityError):
            raise IntegrityRepositoryError(
                f"Database integrity error during {operation}: {error}"
            ) from error
        else:
            raise RepositoryError(
                f"Database error during {operation}: {error}"
            ) from error

    def _build_select_stmt(self, order_by: Optional[str] = None, **filters) -> Any:
        """Build select statement with optional filters and ordering.

        ``order_by`` is a column name, prefixed with ``-`` for descending.
        """
        stmt = select(self.model)

        for field, value in filters.items():
            if hasattr(self.model, field):
                stmt = stmt.where(getattr(self.model, field) == value)

        if order_by:
            column = getattr(self.model, order_by.lstrip("-"))
            stmt = stmt.order_by(column.desc() if order_by.startswith("-") else column)

        return stmt

    # ----------------- CRUD ----------------- #
    async def get(self, item_id: Any, **filters) -> Optional[T]:
        """Get a single item by ID with optional additional filters."""
        async with self.get_session() as db:
            try:
                stmt = self._build_select_stmt(**filters)
                stmt = stmt.where(self.model.id == item_id)  # type: ignore

                result = await db.exec(stmt)
                return result.first()
            except SQLAlchemyError as e:
                self._handle_db_error(e, "get")

    async def get_one(self, **filters) -> Optional[T]:
        """Get a single item matching the filters."""
        async with self.get_session() as db:
            try:
                stmt = self._build_select_stmt(**filters)
                result = await db.exec(stmt)
                return result.first()
            except SQLAlchemyError as e:
                self._handle_db_error(e, "get_one")

    async def get_many_by_ids(self, item_ids: List[Any]) -> List[T]:  # type:ignore
        """Get every item whose ID is in ``item_ids`` (unordered)."""
        if not item_ids:
            return []
        async with self.get_session() as db:
            try:
                stmt = select(self.model).where(self.model.id.in_(item_ids))  # type: ignore
                result = await db.exec(stmt)
                return list(result.all())
            except SQLAlchemyError as e:
                self._handle_db_error(e, "get_many_by_ids")

    async def list(
        self,
        page: int = 1,
        per_page: int = 10,
        order_by: Optional[str] = None,
        **filters,
    ) -> schemas.PaginatedResponse:  # type:ignore
        """Get paginated list of items."""
        if page < 1:
            page = 1
        if per_page < 1 or per_page > 100:
            per_page = 10

        async with self.get_session() as db:
            try:
                offset = (page - 1) * per_page

                # Build base query
                stmt = self._build_select_stmt(order_by=order_by, **filters)

                # Get total count
                count_stmt = select(func.count()).select_from(
                    self._build_select_stmt(**filters).subquery()
                )
                total_result = await db.exec(count_stmt)
                total = total_result.one()

                # Get paginated items
                result = await db.exec(stmt.offset(offset).limit(per_page))
                items = list(result.all())

                # Calculate pages
                pages = (total + per_page - 1) // per_page  # Ceiling division

                return schemas.PaginatedResponse(
                    success=True,
                    data=items,
                    total=total,
                    page=page,
                    per_page=per_page,
                    pages=pages,
                    message="Items retrieved successfully",
                )
            except SQLAlchemyError as e:
                self._handle_db_error(e, "list")

    async def create(
        self, obj_in: Union[Dict[str, Any], BaseModel]
    ) -> T:  # type:ignore
        """Create a new item."""
        if isinstance(obj_in, BaseModel):
            obj_in = obj_in.model_dump(exclude_unset=True)

        async with self.get_session() as db:
            try:
                obj = self.model(**obj_in)  # type: ignore
                db.add(obj)
                await db.commit()
                await db.refresh(obj)
                return obj
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "create")

    async def update(
        self,
        item_id: Any,
        obj_in: Union[Dict[str, Any], BaseModel],
        exclude_unset: bool = True,
    ) -> Optional[T]:
        """Update an existing item. Returns None when the item is gone."""
        if isinstance(obj_in, BaseModel):
            update_data = obj_in.model_dump(exclude_unset=exclude_unset)
        else:
            update_data = dict(obj_in)

        # Remove ID from update data to prevent changing primary key
        update_data.pop("id", None)

        if not update_data:
            raise RepositoryError("No data provided for update")

        async with self.get_session() as db:
            try:
                db_obj = await db.get(self.model, item_id)
                if not db_obj:
                    return None

                for key, value in update_data.items():
                    if hasattr(db_obj, key) and key != "id":
                        setattr(db_obj, key, value)

                await db.commit()
                await db.refresh(db_obj)
                return db_obj
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "update")

    async def exists(self, item_id: Any) -> bool:  # type:ignore
        """Check if an item exists."""
        async with self.get_session() as db:
            try:
                stmt = select(self.model.id).where(self.model.id == item_id)  # type: ignore
                result = await db.exec(stmt)
                return result.first() is not None
            except SQLAlchemyError as e:
                self._handle_db_error(e, "exists")

    # ----------------- DELETE ----------------- #
    async def delete(self, item_id: Any) -> bool:  # type:ignore
        """Permanently delete the item from DB. Returns False when it is gone."""
        async with self.get_session() as db:
            try:
                db_obj = await db.get(self.model, item_id)
                if not db_obj:
                    return False

                await db.delete(db_obj)
                await db.commit()
                return True
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "delete")
