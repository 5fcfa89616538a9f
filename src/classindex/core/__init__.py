"""Core module exports."""

from classindex.core.errors import (
    ClassIndexError,
    ConfigError,
    ErrorCode,
    IndexingError,
    InternalError,
    ResourceError,
)
from classindex.core.logging import (
    clear_session_id,
    configure_logging,
    get_logger,
    get_session_id,
    set_session_id,
)
from classindex.core.progress import status

__all__ = [
    # Errors
    "ClassIndexError",
    "ConfigError",
    "ErrorCode",
    "IndexingError",
    "InternalError",
    "ResourceError",
    # Logging
    "clear_session_id",
    "configure_logging",
    "get_logger",
    "get_session_id",
    "set_session_id",
    # Progress
    "status",
]
