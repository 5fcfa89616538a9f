"""classindex error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Indexing
- 4xxx: Resource I/O
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Indexing (3xxx)
    INDEX_UNRESOLVED_REFERENCE = 3001
    INDEX_REGISTRY_FROZEN = 3002
    INDEX_SESSION_FAILED = 3003
    INDEX_SOURCE_PARSE_ERROR = 3004

    # Resource (4xxx)
    RESOURCE_READ_FAILED = 4001
    RESOURCE_WRITE_FAILED = 4002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class ClassIndexError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ClassIndexError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class IndexingError(ClassIndexError):
    """Errors raised while traversing declarations."""

    @classmethod
    def unresolved_reference(cls, name: str, referenced_from: str) -> "IndexingError":
        return cls(
            code=ErrorCode.INDEX_UNRESOLVED_REFERENCE,
            message=f"Cannot resolve '{name}' referenced from {referenced_from}",
            details={"name": name, "referenced_from": referenced_from},
        )

    @classmethod
    def registry_frozen(cls, name: str) -> "IndexingError":
        return cls(
            code=ErrorCode.INDEX_REGISTRY_FROZEN,
            message=f"Cannot register '{name}' after indexing has started",
            details={"name": name},
        )

    @classmethod
    def session_failed(cls, reason: str) -> "IndexingError":
        return cls(
            code=ErrorCode.INDEX_SESSION_FAILED,
            message=f"Indexing session already failed: {reason}",
            details={"reason": reason},
        )

    @classmethod
    def source_parse_error(cls, path: str, reason: str) -> "IndexingError":
        return cls(
            code=ErrorCode.INDEX_SOURCE_PARSE_ERROR,
            message=f"Failed to parse source {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ResourceError(ClassIndexError):
    """Build output read/write failures."""

    @classmethod
    def read_failed(cls, path: str, reason: str) -> "ResourceError":
        return cls(
            code=ErrorCode.RESOURCE_READ_FAILED,
            message=f"Failed to read resource {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def write_failed(cls, paths: list[str], reason: str) -> "ResourceError":
        return cls(
            code=ErrorCode.RESOURCE_WRITE_FAILED,
            message=f"Failed to write {len(paths)} resource(s): {reason}",
            details={"paths": paths, "reason": reason},
        )


class InternalError(ClassIndexError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
