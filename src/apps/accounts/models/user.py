"""User model."""

from sqlmodel import Field
from src.core.database import BaseModel


class User(BaseModel, table=True):
    """User model class."""

    __tablename__ = "accounts_users"  # type: ignore
    username: str = Field(index=True, unique=True, max_length=50)
    email: str = Field(index=True, unique=True, max_length=255)
    password_hash: str = Field()
