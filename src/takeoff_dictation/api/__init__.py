"""API layer - FastAPI routes and dependencies."""

from .dependencies import (
    CaptureSessionNotFoundError,
    CaptureSessionRegistry,
    RecordSinkDep,
    SessionRegistryDep,
    cleanup_dependencies,
    get_record_sink,
    get_session_registry,
    init_dependencies,
)
from .routes import capture_router

__all__ = [
    # Routes
    "capture_router",
    # Dependencies
    "init_dependencies",
    "cleanup_dependencies",
    "get_record_sink",
    "get_session_registry",
    "CaptureSessionNotFoundError",
    "CaptureSessionRegistry",
    # Type aliases
    "RecordSinkDep",
    "SessionRegistryDep",
]
