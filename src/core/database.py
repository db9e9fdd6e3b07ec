import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import DateTime, Field, SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.core.config import settings


class Database:
    """Owns the async engine; built once per process and handed to repositories."""

    def __init__(self, db_url: str, echo: bool = False):
        self.engine = create_async_engine(db_url, echo=echo, future=True)

    async def create_all(self) -> None:
        # Table models register themselves on SQLModel.metadata when imported.
        import src.shared.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def disconnect(self):
        await self.engine.dispose()

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, Any]:
        async with AsyncSession(self.engine, expire_on_commit=False) as session:
            yield session


class BaseModel(SQLModel):
    """Base model with common fields."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(
        default_factory=settings.get_now,
        sa_type=DateTime(timezone=True),
        index=True,
    )
    updated_at: Optional[datetime] = Field(
        default_factory=settings.get_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": settings.get_now},
    )
