"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CLASSINDEX__SECTION__KEY)
3. Project YAML (classindex.yaml in the project root)
4. Built-in defaults (this file)

Environment Variable Format:
    CLASSINDEX__<SECTION>__<KEY>=<VALUE>

Examples:
    CLASSINDEX__LOGGING__LEVEL=DEBUG
    CLASSINDEX__INDEXER__OUTPUT_DIR=build/classes
    CLASSINDEX__INDEXER__ON_UNRESOLVED=fail
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
UnresolvedPolicy = Literal["skip", "fail"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CLASSINDEX__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every recorded membership.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class IndexerConfig(BaseModel):
    """Indexing session configuration.

    Registering any annotation, superclass or package here switches the
    session to explicit mode: marker decorators are then ignored.

    Env vars:
        CLASSINDEX__INDEXER__OUTPUT_DIR: Build output root for generated files
        CLASSINDEX__INDEXER__MERGE_EXISTING: Merge with index files already on disk
        CLASSINDEX__INDEXER__ON_UNRESOLVED: skip or fail on unresolvable references
    """

    annotations: list[str] = Field(
        default_factory=list,
        description="Qualified names of annotations (decorators) to index.",
    )
    superclasses: list[str] = Field(
        default_factory=list,
        description="Qualified names of classes whose subclasses are indexed.",
    )
    packages: list[str] = Field(
        default_factory=list,
        description="Qualified names of packages whose types are listed.",
    )
    output_dir: str = Field(
        default="build/classindex",
        description="Build output root. Relative paths resolve against the project root.",
    )
    merge_existing: bool = Field(
        default=True,
        description="Union new entries with index files left by earlier builds. "
        "Disable to overwrite them.",
    )
    on_unresolved: UnresolvedPolicy = Field(
        default="skip",
        description="What to do with base classes or decorators that cannot be resolved. "
        "'skip' logs a warning and continues, 'fail' aborts the session.",
    )

    @field_validator("annotations", "superclasses", "packages")
    @classmethod
    def validate_names(cls, v: list[str]) -> list[str]:
        for name in v:
            if not name or name != name.strip() or any(not part for part in name.split(".")):
                raise ValueError(f"Not a qualified name: {name!r}")
        return v

    @property
    def explicit(self) -> bool:
        return bool(self.annotations or self.superclasses or self.packages)


class ClassIndexConfig(BaseModel):
    """Root configuration for classindex.

    All settings can be configured via:
    1. Environment variables: CLASSINDEX__SECTION__KEY
    2. classindex.yaml in the project root
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    indexer: IndexerConfig = Field(default_factory=IndexerConfig)
