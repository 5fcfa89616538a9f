"""structlog setup for classindex.

Events are rendered by stdlib handlers, one per configured output, so the
console can stay quiet while a file output records every membership at
DEBUG. Each build runs as one indexing session: ``set_session_id`` tags
every event of that run so interleaved builds writing to one log file can be
told apart.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from classindex.config.models import LoggingConfig, LogOutputConfig

_session_id: ContextVar[str | None] = ContextVar("session_id", default=None)

# First file output of the active configuration
_log_file_path: Path | None = None

_CONSOLE_DESTINATIONS = ("stderr", "stdout")


def get_session_id() -> str | None:
    return _session_id.get()


def set_session_id(session_id: str | None = None) -> str:
    """Start tagging events with ``session_id`` (a fresh 12-char hex id if omitted)."""
    sid = session_id or uuid4().hex[:12]
    _session_id.set(sid)
    return sid


def clear_session_id() -> None:
    _session_id.set(None)


def get_log_file_path() -> Path | None:
    """File the CLI points at when a build fails, if logging goes to one."""
    return _log_file_path


def _add_session_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if sid := get_session_id():
        event_dict["session_id"] = sid
    return event_dict


def _level(name: str | None, default: int) -> int:
    if name is None:
        return default
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else default


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Install structlog and one stdlib handler per output.

    ``config`` wins over ``json_format`` and ``level``; without it a single
    stderr output is configured from those two. Safe to call again: handlers
    of the previous call are replaced.
    """
    global _log_file_path
    from classindex.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )
    root_level = _level(config.level, logging.INFO)

    shared: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _add_session_id,  # type: ignore[list-item]
    ]
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # levels change between CLI invocations in one process (tests)
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    _log_file_path = None

    for output in config.outputs:
        is_console = output.destination in _CONSOLE_DESTINATIONS
        if not is_console and _log_file_path is None:
            _log_file_path = Path(output.destination)

        handler = _handler(output)
        handler.setLevel(_level(output.level, root_level))
        handler.setFormatter(_formatter(output, shared, is_console))
        root.addHandler(handler)


def _handler(output: LogOutputConfig) -> logging.Handler:
    if output.destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if output.destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(output.destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def _formatter(
    output: LogOutputConfig,
    shared: list[structlog.types.Processor],
    is_console: bool,
) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=is_console and sys.stderr.isatty(),
            pad_event_to=0,
            pad_level=False,
        )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
