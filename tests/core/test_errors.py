"""Tests for error types and codes."""

import pytest

from classindex.core.errors import (
    ClassIndexError,
    ConfigError,
    ErrorCode,
    IndexingError,
    InternalError,
    ResourceError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.INDEX_UNRESOLVED_REFERENCE, 3000),
            (ErrorCode.INDEX_SESSION_FAILED, 3000),
            (ErrorCode.RESOURCE_WRITE_FAILED, 4000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestClassIndexError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all fields."""
        # Given
        error = ClassIndexError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_includes_code_and_name(self) -> None:
        """String form carries code, name and message."""
        # Given
        error = InternalError.unexpected("boom")

        # When
        text = str(error)

        # Then
        assert text == "[9001] INTERNAL_ERROR: Internal error: boom"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Errors are real exceptions."""
        with pytest.raises(ClassIndexError):
            raise ConfigError.parse_error("/project/classindex.yaml", "bad indent")


class TestFactories:
    """Factory classmethod tests."""

    def test_config_invalid_value(self) -> None:
        error = ConfigError.invalid_value("indexer.on_unresolved", "explode", "bad literal")

        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "indexer.on_unresolved" in error.message

    def test_unresolved_reference(self) -> None:
        error = IndexingError.unresolved_reference("app:Missing", "app.Widget")

        assert error.code == ErrorCode.INDEX_UNRESOLVED_REFERENCE
        assert "app:Missing" in error.message
        assert "app.Widget" in error.message

    def test_registry_frozen(self) -> None:
        error = IndexingError.registry_frozen("app.Tag")

        assert error.code == ErrorCode.INDEX_REGISTRY_FROZEN

    def test_session_failed(self) -> None:
        error = IndexingError.session_failed("earlier failure")

        assert error.code == ErrorCode.INDEX_SESSION_FAILED
        assert "earlier failure" in str(error)

    def test_write_failed_lists_paths(self) -> None:
        paths = ["META-INF/annotated/a.Tag", "app/jbossindex"]

        error = ResourceError.write_failed(paths, "disk full")

        assert error.code == ErrorCode.RESOURCE_WRITE_FAILED
        assert error.details["paths"] == paths
        assert "2 resource(s)" in error.message

    def test_internal_unexpected_keeps_details(self) -> None:
        error = InternalError.unexpected("no report", session="abc")

        assert error.details == {"session": "abc"}
