"""User service."""

import uuid
from typing import Any, Dict

from src.core import exceptions
from src.core.bases.base_service import BaseService
from src.core.logger import get_logger
from src.core.security.passwords import hash_password, verify_password
from src.core.security.tokens import IdentityResolver
from src.apps.accounts.models.user import User
from src.apps.accounts.repositories.user_repository import UserRepository
from src.apps.accounts.schemas.user import LoginRequest, TokenResponse, UserCreate, UserRead

logger = get_logger("accounts")


class UserService(BaseService[User]):
    """Signup, login and profile lookup."""

    not_found_message = "User not found"

    def __init__(self, repository: UserRepository, identity_resolver: IdentityResolver):
        super().__init__(repository)
        self.repository: UserRepository = repository
        self.identity_resolver = identity_resolver

    async def _validate_create(self, create_data: Dict[str, Any]) -> None:
        if await self._call(self.repository.get_by_email(create_data["email"]), "signup"):
            raise exceptions.ConflictException("User already exists")
        if await self._call(self.repository.get_by_username(create_data["username"]), "signup"):
            raise exceptions.ConflictException("Username is already taken")

    async def register(self, user_in: UserCreate) -> Dict[str, Any]:
        create_data = user_in.model_dump()
        await self._validate_create(create_data)

        user = await self._call(
            self.repository.create(
                {
                    "username": create_data["username"],
                    "email": create_data["email"],
                    "password_hash": hash_password(create_data["password"]),
                }
            ),
            "signup",
        )
        logger.info("User %s registered", user.id)
        return {"data": UserRead.model_validate(user), "message": "User created successfully"}

    async def login(self, credentials: LoginRequest) -> Dict[str, Any]:
        user = await self._call(self.repository.get_by_email(credentials.email), "login")
        if user is None or not verify_password(credentials.password, user.password_hash):
            raise exceptions.UnauthenticatedException("Invalid email or password")

        token = self.identity_resolver.issue_token(user.id, username=user.username)
        return {
            "data": TokenResponse(token=token, user=UserRead.model_validate(user)),
            "message": "Login successful",
        }

    async def get_me(self, user_id: uuid.UUID) -> Dict[str, Any]:
        user = await self._get_or_404(user_id)
        return {"data": UserRead.model_validate(user), "message": "User found"}
