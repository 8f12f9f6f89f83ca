"""
Takeoff Dictation - FastAPI Application

Hands-free voice capture of steel takeoff line items.
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Must happen before importing modules that use environment variables
load_dotenv()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from takeoff_dictation import __version__  # noqa: E402
from takeoff_dictation.api.dependencies import (  # noqa: E402
    cleanup_dependencies,
    init_dependencies,
)
from takeoff_dictation.api.routes import capture_router  # noqa: E402
from takeoff_dictation.config import (  # noqa: E402
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    get_cors_allow_credentials,
    get_cors_origins,
    get_log_level,
)

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan manager for startup/shutdown events.

    Startup:
    - Create the record sink and session registry

    Shutdown:
    - Stop open capture sessions
    - Close HTTP connections
    """
    logger.info("Starting takeoff dictation service...")
    await init_dependencies()
    logger.info("Dependencies initialized")

    yield

    logger.info("Shutting down takeoff dictation service...")
    await cleanup_dependencies()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Takeoff Dictation API",
    description="Hands-free voice capture of takeoff line items",
    version=__version__,
    lifespan=lifespan,
)

# CORS configuration - loaded from environment with restrictive defaults
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=get_cors_allow_credentials(),
    allow_methods=CORS_ALLOWED_METHODS,
    allow_headers=CORS_ALLOWED_HEADERS,
)

app.include_router(capture_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "takeoff-dictation",
        "version": __version__,
    }
