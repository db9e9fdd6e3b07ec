"""Accounts app."""

from .routers.auth_router import router as auth_router
