"""
Bearer tokens.

Tokens are HS256 JWTs carrying the user id in ``sub``. They are never stored
server side; anything that fails verification is treated as anonymous.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from src.core.logger import get_logger

logger = get_logger("auth")


class IdentityResolver:
    """Issues tokens and turns a presented token back into a user id."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 1440):
        if not secret:
            raise ValueError("A token secret is required")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue_token(
        self,
        user_id: uuid.UUID,
        username: Optional[str] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=self.expire_minutes))
        payload = {"sub": str(user_id), "iat": now, "exp": expire}
        if username:
            payload["username"] = username
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def resolve_identity(self, credential: Optional[str]) -> Optional[uuid.UUID]:
        """Return the user id a valid token asserts, else None.

        Bad signatures, malformed or expired tokens all degrade to anonymous so
        that public reads keep working for clients holding a stale token.
        """
        if not credential:
            return None
        try:
            payload = jwt.decode(
                credential,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
            return uuid.UUID(str(payload["sub"]))
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except (jwt.PyJWTError, ValueError) as e:
            logger.debug("Rejected token: %s", e)
            return None
