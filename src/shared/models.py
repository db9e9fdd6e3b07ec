# Import every table model so SQLModel.metadata knows about it.
from src.apps.accounts.models.user import User  # noqa: F401
from src.apps.blog.models.post import Post  # noqa: F401
