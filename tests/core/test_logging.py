"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import structlog

from classindex.config.models import LoggingConfig, LogOutputConfig
from classindex.core.logging import (
    clear_session_id,
    configure_logging,
    get_log_file_path,
    get_logger,
    get_session_id,
    set_session_id,
)


class TestSessionIdCorrelation:
    """Session ID context variable tests."""

    def setup_method(self) -> None:
        """Clear session ID before each test."""
        clear_session_id()

    def test_given_session_id_when_set_then_can_retrieve(self) -> None:
        """Session ID can be set and retrieved."""
        # Given
        session_id = "test-123"

        # When
        result = set_session_id(session_id)

        # Then
        assert result == session_id
        assert get_session_id() == session_id

    def test_given_no_id_when_set_then_generates_uuid(self) -> None:
        """Set generates UUID-based ID when none provided."""
        # When
        sid = set_session_id()

        # Then
        assert len(sid) == 12  # uuid4().hex[:12]

    def test_given_set_id_when_clear_then_removes_id(self) -> None:
        """Clear removes the current session ID."""
        # Given
        set_session_id("to-clear")

        # When
        clear_session_id()

        # Then
        assert get_session_id() is None


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_session_id()

    def teardown_method(self) -> None:
        clear_session_id()

    def test_given_json_file_output_when_log_then_valid_json(self, tmp_path: Path) -> None:
        """JSON output carries event, fields, level, timestamp and logger name."""
        # Given
        log_file = tmp_path / "classindex.log"
        configure_logging(
            config=LoggingConfig(
                level="INFO",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        logger = get_logger("index.writer")

        # When
        logger.info("index_written", path="META-INF/annotated/a.Tag", entries=2)

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["event"] == "index_written"
        assert data["entries"] == 2
        assert data["level"] == "info"
        assert data["logger"] == "index.writer"
        assert "timestamp" in data

    def test_given_session_when_log_then_session_id_bound(self, tmp_path: Path) -> None:
        """Every event of a session carries its correlation ID."""
        # Given
        log_file = tmp_path / "classindex.log"
        configure_logging(
            config=LoggingConfig(
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        set_session_id("sess-1")

        # When
        get_logger().info("index_finalized")

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["session_id"] == "sess-1"

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When - config's DEBUG overrides the level="ERROR" param
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()
        assert get_log_file_path() == log_file

    def test_given_multi_output_config_when_configure_then_levels_apply(
        self, tmp_path: Path
    ) -> None:
        """Each output filters by its own level."""
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="console", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        # Then
        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content
        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_console_only_when_configure_then_no_log_file(self) -> None:
        configure_logging(level="WARNING")

        assert get_log_file_path() is None
