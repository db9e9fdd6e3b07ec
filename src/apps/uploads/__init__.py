"""Uploads app."""

from .routers.upload_router import router as upload_router
