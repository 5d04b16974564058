from __future__ import annotations

from collections.abc import Iterator

import pytest

from slotwire.registry import Registry
from slotwire.registry_context import RegistryContext, registry_context


@pytest.fixture()
def slotwire_registry() -> Registry:
    """Create a per-test isolated registry.

    The fixture is function-scoped, so registrations, interned keys and
    cached singletons never leak between tests unless users override fixture
    scope explicitly.

    Returns:
        A new ``Registry`` instance.

    """
    return Registry()


@pytest.fixture()
def slotwire_context(slotwire_registry: Registry) -> Iterator[RegistryContext]:
    """Bind ``slotwire_registry`` as the process-wide registry for one test.

    Code under test that goes through ``slotwire.registry_context`` sees the
    per-test registry. After the test the previous binding is restored: a
    registry bound at application startup stays bound, and an unbound context
    stays unbound.

    Yields:
        The process-wide ``RegistryContext`` bound to ``slotwire_registry``.

    """
    previous = registry_context.get_bound()
    registry_context.set_current(slotwire_registry)
    try:
        yield registry_context
    finally:
        registry_context.restore(previous)
