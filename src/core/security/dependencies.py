"""FastAPI dependencies that resolve the requester from the Authorization header."""

import uuid
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.core import exceptions
from src.core.security.tokens import IdentityResolver

bearer_scheme = HTTPBearer(auto_error=False)


def get_identity_resolver(request: Request) -> IdentityResolver:
    return request.app.state.identity_resolver


def get_requester(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Optional[uuid.UUID]:
    """The caller's user id, or None for anonymous/invalid credentials."""
    token = credentials.credentials if credentials else None
    return resolver.resolve_identity(token)


def require_requester(
    requester: Optional[uuid.UUID] = Depends(get_requester),
) -> uuid.UUID:
    if requester is None:
        raise exceptions.UnauthenticatedException("Authentication required")
    return requester
