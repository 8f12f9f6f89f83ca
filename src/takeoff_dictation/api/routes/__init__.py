"""API routes module."""

from .capture import router as capture_router

__all__ = ["capture_router"]
