"""Post model."""

import uuid
from enum import Enum
from typing import Optional

from sqlmodel import Field
from src.core.database import BaseModel


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class Post(BaseModel, table=True):
    """Post model class."""

    __tablename__ = "blog_posts"  # type: ignore
    title: str = Field(max_length=255)
    content: str = Field()
    image_url: Optional[str] = Field(default=None, max_length=1024)
    visibility: Visibility = Field(default=Visibility.PUBLIC, index=True)
    author_id: uuid.UUID = Field(foreign_key="accounts_users.id", index=True)
