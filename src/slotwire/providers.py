from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, TypeAlias, TypeVar

from slotwire.identity import DependencyIdentity

T = TypeVar("T")

UserContract: TypeAlias = Any
"""A contract that has been registered or is being resolved from the user's code."""

Producer: TypeAlias = type[T] | Callable[[], T]
"""A concrete class or a zero-argument factory that produces a dependency."""

_EMPTY: Any = object()


class Lifetime(Enum):
    """Defines how often a registered producer is invoked."""

    PROTOTYPE = auto()
    """A new instance is created every time the contract is resolved."""

    SINGLETON = auto()
    """A single instance is created on first resolution and shared afterwards."""


@dataclass(kw_only=True)
class RegistrationEntry:
    """A producer bound to one registration slot.

    ``cached_instance`` is only ever written for ``Lifetime.SINGLETON``
    entries, once, by the owning registry while it holds its lock.
    """

    identity: DependencyIdentity
    """The slot this entry occupies."""
    producer: Producer[Any]
    """The class or zero-argument factory invoked to build instances."""
    lifetime: Lifetime
    """Whether instances are built per resolution or once."""
    key: str | None = None
    """The disambiguator string the entry was registered with."""

    _cached_instance: Any = field(default=_EMPTY, init=False, repr=False)

    @property
    def contract(self) -> UserContract:
        return self.identity.contract

    @property
    def is_cached(self) -> bool:
        """True once a singleton instance has been built."""
        return self._cached_instance is not _EMPTY

    @property
    def cached_instance(self) -> Any | None:
        """The cached singleton instance, ``None`` while nothing was built."""
        if self._cached_instance is _EMPTY:
            return None
        return self._cached_instance

    def produce(self) -> Any:
        """Return an instance according to ``lifetime``.

        Must be called under the owning registry lock. Producer exceptions
        propagate and leave the cache untouched.
        """
        if self.lifetime is Lifetime.PROTOTYPE:
            return self.producer()

        if self._cached_instance is _EMPTY:
            self._cached_instance = self.producer()
        return self._cached_instance


class Registrations:
    """Holds all registration entries of a registry, keyed by identity."""

    def __init__(self) -> None:
        self._entries_by_identity: dict[DependencyIdentity, RegistrationEntry] = {}

    def add_if_absent(self, entry: RegistrationEntry) -> bool:
        """Store ``entry`` unless its slot is taken.

        Returns:
            ``True`` when the entry was stored, ``False`` when an earlier
            registration already owns the slot.

        """
        if entry.identity in self._entries_by_identity:
            return False
        self._entries_by_identity[entry.identity] = entry
        return True

    def find(self, identity: DependencyIdentity) -> RegistrationEntry | None:
        """Get the entry for ``identity``, if it exists."""
        return self._entries_by_identity.get(identity)

    def values(self) -> list[RegistrationEntry]:
        """Get all entries in registration order."""
        return list(self._entries_by_identity.values())

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries_by_identity

    def __len__(self) -> int:
        return len(self._entries_by_identity)
