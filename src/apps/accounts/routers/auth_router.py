"""Auth router."""

import uuid

from fastapi import APIRouter, Depends, Request, status

from src.core.response.handlers import success_response
from src.core.security.dependencies import get_identity_resolver, require_requester
from src.apps.accounts.repositories.user_repository import UserRepository
from src.apps.accounts.schemas.user import LoginRequest, UserCreate
from src.apps.accounts.services.user_service import UserService


def get_user_repository(request: Request) -> UserRepository:
    """Get user repository instance."""
    return UserRepository(request.app.state.database.get_session)


def get_user_service(
    request: Request,
    repository: UserRepository = Depends(get_user_repository),
) -> UserService:
    """Get user service instance."""
    return UserService(repository, get_identity_resolver(request))


router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User created successfully"},
        400: {"description": "Validation error"},
        409: {"description": "User already exists"},
    },
)
async def signup(user_in: UserCreate, service: UserService = Depends(get_user_service)):
    result = await service.register(user_in)
    return success_response(
        data=result["data"], message=result["message"], status_code=status.HTTP_201_CREATED
    )


@router.post(
    "/login",
    summary="Exchange email and password for a bearer token",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(credentials: LoginRequest, service: UserService = Depends(get_user_service)):
    result = await service.login(credentials)
    return success_response(data=result["data"], message=result["message"])


@router.get(
    "/me",
    summary="Current user",
    responses={
        200: {"description": "User found"},
        401: {"description": "Not authenticated"},
        404: {"description": "User not found"},
    },
)
async def me(
    requester: uuid.UUID = Depends(require_requester),
    service: UserService = Depends(get_user_service),
):
    result = await service.get_me(requester)
    return success_response(data=result["data"], message=result["message"])


@router.get("/logout", summary="Log out")
async def logout():
    """Tokens are stateless; the client just drops its copy."""
    return success_response(message="Logout successful")
