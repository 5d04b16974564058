"""Shared pytest fixtures for slotwire tests."""

import pytest

from slotwire.keys import KeyRegistry
from slotwire.registry import Registry


@pytest.fixture()
def registry() -> Registry:
    """Fresh isolated registry."""
    return Registry()


@pytest.fixture()
def key_registry() -> KeyRegistry:
    """Fresh key registry with nothing interned."""
    return KeyRegistry()
