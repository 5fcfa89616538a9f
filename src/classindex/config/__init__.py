"""Config module exports."""

from classindex.config.loader import ClassIndexSettings, load_config, resolve_output_dir
from classindex.config.models import (
    ClassIndexConfig,
    IndexerConfig,
    LoggingConfig,
)

__all__ = [
    "load_config",
    "resolve_output_dir",
    "ClassIndexConfig",
    "ClassIndexSettings",
    "IndexerConfig",
    "LoggingConfig",
]
