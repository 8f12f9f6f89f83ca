"""Application configuration loaded from environment variables.

Provides type-safe access to configuration with sensible defaults.
Production defaults are restrictive for security.
"""

import os

from takeoff_dictation.domain.constants import DEFAULT_LINE_ID_PREFIX


def get_line_id_prefix() -> str:
    """Get the prefix combined with spoken record numbers ("line id 3" -> "L3").

    Environment variable: LINE_ID_PREFIX
    Default: L
    """
    return os.getenv("LINE_ID_PREFIX", DEFAULT_LINE_ID_PREFIX).strip() or DEFAULT_LINE_ID_PREFIX


def get_record_sink_type() -> str:
    """Get record sink type from environment.

    Options:
        - 'memory': Keep committed lines in memory (default, no store required)
        - 'http': POST committed lines to RECORD_SINK_URL
    """
    return os.getenv("RECORD_SINK", "memory").lower()


def get_record_sink_url() -> str:
    """Get the record store endpoint for committed lines.

    Environment variable: RECORD_SINK_URL
    Default: localhost:8000 for local development
    """
    return os.getenv("RECORD_SINK_URL", "http://localhost:8000/api/lines")


def get_record_sink_timeout() -> float:
    """Get record store request timeout in seconds.

    Environment variable: RECORD_SINK_TIMEOUT
    Default: 5.0
    """
    return float(os.getenv("RECORD_SINK_TIMEOUT", "5.0"))


def get_record_sink_max_attempts() -> int:
    """Get how many times a transient delivery failure is attempted.

    Environment variable: RECORD_SINK_MAX_ATTEMPTS
    Default: 3
    """
    return int(os.getenv("RECORD_SINK_MAX_ATTEMPTS", "3"))


def get_log_level() -> str:
    """Get root log level.

    Environment variable: LOG_LEVEL
    Default: INFO
    """
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_cors_origins() -> list[str]:
    """Get allowed CORS origins from environment.

    Environment variable: CORS_ORIGINS (comma-separated)
    Default: localhost ports 3000-3001 for development
    """
    default_origins = "http://localhost:3000,http://localhost:3001"
    origins_str = os.getenv("CORS_ORIGINS", default_origins)
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


def get_cors_allow_credentials() -> bool:
    """Get CORS allow_credentials setting.

    Environment variable: CORS_ALLOW_CREDENTIALS
    Default: true for development
    """
    return os.getenv("CORS_ALLOW_CREDENTIALS", "true").lower() == "true"


# Restricted HTTP methods - only what the API actually uses
CORS_ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]

# Restricted headers - only what's needed for the API
CORS_ALLOWED_HEADERS = [
    "Accept",
    "Accept-Language",
    "Content-Type",
    "Authorization",
    "X-Requested-With",
]
