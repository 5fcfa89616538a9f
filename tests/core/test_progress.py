"""Tests for CLI status output."""

import pytest

from classindex.core.progress import get_console, pluralize, status


class TestPluralize:
    @pytest.mark.parametrize(
        ("count", "singular", "plural", "expected"),
        [
            (0, "file", None, "0 files"),
            (1, "file", None, "1 file"),
            (2, "file", None, "2 files"),
            (3, "entry", "entries", "3 entries"),
            (1, "entry", "entries", "1 entry"),
        ],
    )
    def test_forms(self, count: int, singular: str, plural: str | None, expected: str) -> None:
        assert pluralize(count, singular, plural) == expected


class TestStatus:
    def test_prints_prefixed_message(self) -> None:
        console = get_console()

        with console.capture() as capture:
            status("Index written", style="success")

        output = capture.get()
        assert "✓" in output
        assert "Index written" in output

    def test_unknown_style_prints_plain(self) -> None:
        console = get_console()

        with console.capture() as capture:
            status("plain", style="nonexistent", indent=2)

        assert capture.get() == "  plain\n"
