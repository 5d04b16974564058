from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar, overload

from slotwire.providers import Lifetime, Producer, UserContract
from slotwire.registry import Registry

T = TypeVar("T")
P = TypeVar("P", bound=Callable[..., Any])

logger = logging.getLogger(__name__)


class RegistryContext:
    """Own the process-wide registry and proxy calls to it.

    The registry is created lazily on first access and stays bound until
    ``reset`` is called. Applications that want explicit startup call
    ``set_current`` with a registry they built themselves.

    The binding is process-global for this instance (not task-local or
    thread-local), which is convenient for application startup but important
    for tests that run in parallel. Tests that need isolation should build
    their own ``Registry()`` or use the ``slotwire_context`` pytest fixture.
    """

    def __init__(self) -> None:
        self._registry: Registry | None = None
        self._lock = threading.Lock()

    def get_current(self) -> Registry:
        """Return the bound registry, creating and binding one on first access.

        Returns:
            The process-wide registry. Concurrent first calls all receive the
            same instance.

        """
        registry = self._registry
        if registry is not None:
            return registry

        with self._lock:
            if self._registry is None:
                self._registry = Registry()
                logger.debug("Created process-wide registry %r", self._registry)
            return self._registry

    def set_current(self, registry: Registry) -> None:
        """Bind ``registry`` as the process-wide registry.

        Args:
            registry: Registry to bind. Any previously bound registry is
                released, not merged.

        """
        with self._lock:
            self._registry = registry

    def reset(self) -> None:
        """Unbind the current registry; the next access creates a fresh one."""
        with self._lock:
            self._registry = None

    @property
    def is_bound(self) -> bool:
        return self._registry is not None

    def get_bound(self) -> Registry | None:
        """Return the bound registry without creating one."""
        return self._registry

    def restore(self, registry: Registry | None) -> None:
        """Rebind a value previously returned by ``get_bound``.

        ``None`` unbinds, any registry is bound as with ``set_current``.
        """
        with self._lock:
            self._registry = registry

    def register(
        self,
        contract: UserContract,
        producer: Producer[Any],
        *,
        lifetime: Lifetime = Lifetime.PROTOTYPE,
        key: str | None = None,
    ) -> None:
        """Register on the current registry. See ``Registry.register``."""
        self.get_current().register(contract, producer, lifetime=lifetime, key=key)

    def register_prototype(
        self,
        contract: UserContract,
        producer: Producer[Any] | None = None,
        *,
        key: str | None = None,
    ) -> Callable[[P], P] | None:
        """Register a prototype on the current registry. See ``Registry.register_prototype``."""
        return self.get_current().register_prototype(contract, producer, key=key)

    def register_singleton(
        self,
        contract: UserContract,
        producer: Producer[Any] | None = None,
        *,
        key: str | None = None,
    ) -> Callable[[P], P] | None:
        """Register a singleton on the current registry. See ``Registry.register_singleton``."""
        return self.get_current().register_singleton(contract, producer, key=key)

    @overload
    def resolve(self, contract: type[T], *, key: str | None = None) -> T | None: ...

    @overload
    def resolve(self, contract: Any, *, key: str | None = None) -> Any | None: ...

    def resolve(self, contract: Any, *, key: str | None = None) -> Any | None:
        """Resolve from the current registry. See ``Registry.resolve``."""
        return self.get_current().resolve(contract, key=key)


registry_context = RegistryContext()
"""The process-wide registry context."""
