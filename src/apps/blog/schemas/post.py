"""Post schemas."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.apps.blog.models.post import Visibility


def _not_blank(value: Optional[str], field: str) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError(f"{field} must not be empty")
    return value


class PostCreate(BaseModel):
    """Schema for creating a post."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=255)
    content: str
    image_url: Optional[str] = Field(default=None, max_length=1024)
    visibility: Visibility = Visibility.PUBLIC

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str, info) -> str:
        return _not_blank(value, info.field_name)


class PostUpdate(BaseModel):
    """Schema for updating a post. Only the fields sent are changed."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=1024)
    visibility: Optional[Visibility] = None

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: Optional[str], info) -> Optional[str]:
        return _not_blank(value, info.field_name)

    @model_validator(mode="after")
    def check_fields(self):
        if not self.model_fields_set:
            raise ValueError("No data provided for update")
        for field in ("title", "content", "visibility"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class PostAuthor(BaseModel):
    id: uuid.UUID
    username: Optional[str] = None


class PostRead(BaseModel):
    """Post as returned by the API, with the author embedded."""

    id: uuid.UUID
    title: str
    content: str
    image_url: Optional[str] = None
    visibility: Visibility
    author: PostAuthor
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
