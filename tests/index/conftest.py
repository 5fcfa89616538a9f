"""Fixtures for the index tests."""

import pytest

from classindex.index.resources import MemoryResourceStore
from tests.index.builders import reset_packages


@pytest.fixture(autouse=True)
def _clear_packages() -> None:
    reset_packages()


@pytest.fixture
def store() -> MemoryResourceStore:
    return MemoryResourceStore()
