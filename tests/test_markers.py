"""Tests for the runtime marker decorators."""

from classindex.markers import index_annotated, index_subclasses, inherited


class TestMarkers:
    """Markers leave their targets untouched."""

    def test_bare_marker_returns_target(self) -> None:
        class Handler:
            pass

        assert index_subclasses(Handler) is Handler

    def test_marker_with_arguments_returns_decorator(self) -> None:
        def plugin(cls: type) -> type:
            return cls

        assert index_annotated(store_docs=True)(plugin) is plugin

    def test_inherited_returns_target(self) -> None:
        def tag(cls: type) -> type:
            return cls

        assert inherited(tag) is tag

    def test_stacked_markers(self) -> None:
        @inherited
        @index_annotated
        def plugin(cls: type) -> type:
            return cls

        @plugin
        class Echo:
            pass

        assert plugin.__name__ == "plugin"
        assert Echo.__name__ == "Echo"

    def test_package_call_form(self) -> None:
        """Called with only keyword arguments at module level, the result is discarded."""
        assert callable(index_subclasses(store_docs=True))

    def test_marker_names(self) -> None:
        assert index_annotated.__name__ == "index_annotated"
        assert index_subclasses.__name__ == "index_subclasses"
