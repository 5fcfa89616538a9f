"""Marker decorators recognized by the indexer.

The markers have no runtime effect; the source scanner finds them
statically. Each can be used bare or with arguments::

    from classindex.markers import index_annotated, index_subclasses, inherited

    @inherited
    @index_annotated(store_docs=True)
    def plugin(cls):
        return cls

    @index_subclasses
    class Handler: ...

A package is marked by calling ``index_subclasses()`` at module level in its
``__init__.py``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


def _marker(name: str, doc: str) -> Callable[..., Any]:
    def marker(target: object = None, /, *, store_docs: bool = False) -> object:  # noqa: ARG001
        if target is not None:
            return target

        def decorate(inner: T) -> T:
            return inner

        return decorate

    marker.__name__ = marker.__qualname__ = name
    marker.__doc__ = doc
    return marker


index_annotated = _marker(
    "index_annotated",
    "Index every type decorated with the decorated annotation.",
)
index_subclasses = _marker(
    "index_subclasses",
    "Index every subclass of the decorated class, or every type of the calling package.",
)


def inherited(target: T) -> T:
    """Annotations marked inherited also index subclasses of annotated types."""
    return target


__all__ = ["index_annotated", "index_subclasses", "inherited"]
