"""
Who may do what to a post.

``authorize`` is a pure decision function: no I/O, never raises, and every
combination of inputs maps to ALLOW or DENY(reason).

    read    public            -> allow anyone, including anonymous
    read    private           -> allow the author only
    create                    -> allow any authenticated requester
    update / delete           -> allow the author only
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from src.core import exceptions
from src.apps.blog.models.post import Visibility


class Action(str, Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class DenyReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[DenyReason] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True)
DENY_UNAUTHENTICATED = Decision(False, DenyReason.UNAUTHENTICATED)
DENY_FORBIDDEN = Decision(False, DenyReason.FORBIDDEN)


def _is_author(requester: Optional[uuid.UUID], post: Any) -> bool:
    author_id = getattr(post, "author_id", None)
    return requester is not None and author_id is not None and str(requester) == str(author_id)


def _is_public(post: Any) -> bool:
    visibility = getattr(post, "visibility", None)
    # Anything that isn't exactly "public" is treated as private.
    return visibility == Visibility.PUBLIC


def authorize(action: Any, requester: Optional[uuid.UUID], post: Any = None) -> Decision:
    """Decide whether ``requester`` (None for anonymous) may ``action`` ``post``."""
    if action == Action.CREATE:
        return ALLOW if requester is not None else DENY_UNAUTHENTICATED

    if post is None:
        return DENY_FORBIDDEN

    if action == Action.READ:
        if _is_public(post) or _is_author(requester, post):
            return ALLOW
        return DENY_FORBIDDEN

    if action in (Action.UPDATE, Action.DELETE):
        if requester is None:
            return DENY_UNAUTHENTICATED
        return ALLOW if _is_author(requester, post) else DENY_FORBIDDEN

    return DENY_FORBIDDEN


def ensure_allowed(decision: Decision, message: str = "") -> None:
    """Raise the exception matching a DENY decision; do nothing on ALLOW."""
    if decision.allowed:
        return
    if decision.reason == DenyReason.UNAUTHENTICATED:
        raise exceptions.UnauthenticatedException(message or "Authentication required")
    raise exceptions.ForbiddenException(message or "You are not allowed to perform this action")
