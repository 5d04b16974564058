from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar, overload

from slotwire.exceptions import SlotWireInvalidRegistrationError
from slotwire.identity import DependencyIdentity
from slotwire.keys import KeyRegistry
from slotwire.markers import split_component_contract
from slotwire.providers import (
    Lifetime,
    Producer,
    RegistrationEntry,
    Registrations,
    UserContract,
)
from slotwire.validators import RegistrationValidator

T = TypeVar("T")
P = TypeVar("P", bound=Callable[..., Any])

logger = logging.getLogger(__name__)


class Registry:
    """Map contracts to producers with prototype or singleton lifetimes.

    A contract is usually a class or protocol. Several producers can serve the
    same contract when each is registered under its own string ``key``; the
    key is optional and omitting it addresses the default slot.
    ``Annotated[Contract, Component("key")]`` is accepted wherever a
    ``(contract, key)`` pair is.

    Registration is first-writer-wins: registering an occupied slot again is a
    silent no-op. Resolution of a missing slot returns ``None``.

    Every public method runs under one re-entrant lock, including producer
    invocation. Concurrent first resolutions of a singleton therefore build
    exactly one instance, and a producer may itself resolve other contracts
    from the same registry.

    Each ``Registry()`` is fully isolated: separate registrations, separate
    interned keys, separate lock. Use ``slotwire.registry_context`` for the
    process-wide instance.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._keys = KeyRegistry()
        self._registrations = Registrations()
        self._validator = RegistrationValidator()

    # region Registration

    def register(
        self,
        contract: UserContract,
        producer: Producer[Any],
        *,
        lifetime: Lifetime = Lifetime.PROTOTYPE,
        key: str | None = None,
    ) -> None:
        """Bind ``producer`` to the ``(contract, key)`` slot.

        Args:
            contract: Contract callers resolve. ``Annotated[C, Component("k")]``
                is equivalent to ``contract=C, key="k"``.
            producer: Concrete class implementing ``contract`` (built with no
                arguments) or a zero-argument factory callable.
            lifetime: ``Lifetime.PROTOTYPE`` for a new instance per resolution,
                ``Lifetime.SINGLETON`` for one lazily built shared instance.
            key: Optional disambiguator allowing several producers per contract.

        Raises:
            SlotWireInvalidRegistrationError: If the contract, producer or
                lifetime is invalid, or a key is given both ways.
            SlotWireInvalidKeyError: If ``key`` is not a string.

        Notes:
            If the slot is already occupied the call does nothing; the first
            registration stays authoritative.

        Examples:
            .. code-block:: python

                registry.register(Shape, Circle, lifetime=Lifetime.SINGLETON)
                registry.register(Shape, Square, key="sq")

        """
        contract, key = self._normalize_contract_key(contract=contract, key=key)
        self._validator.validate(contract=contract, producer=producer, lifetime=lifetime)

        with self._lock:
            identity = DependencyIdentity.build(
                contract,
                key,
                keys=self._keys,
                allow_create=True,
            )
            entry = RegistrationEntry(
                identity=identity,
                producer=producer,
                lifetime=lifetime,
                key=key,
            )
            if self._registrations.add_if_absent(entry):
                logger.debug(
                    "Registered %s as %s for %r",
                    _describe(producer),
                    lifetime.name,
                    identity,
                )
            else:
                logger.debug(
                    "Ignored %s registration of %s: %r is already registered",
                    lifetime.name,
                    _describe(producer),
                    identity,
                )

    @overload
    def register_prototype(
        self,
        contract: UserContract,
        producer: None = None,
        *,
        key: str | None = None,
    ) -> Callable[[P], P]: ...

    @overload
    def register_prototype(
        self,
        contract: UserContract,
        producer: Producer[Any],
        *,
        key: str | None = None,
    ) -> None: ...

    def register_prototype(
        self,
        contract: UserContract,
        producer: Producer[Any] | None = None,
        *,
        key: str | None = None,
    ) -> Callable[[P], P] | None:
        """Register ``producer`` so every resolution builds a new instance.

        Supports direct calls and decorator form (omit ``producer``).

        Examples:
            .. code-block:: python

                registry.register_prototype(Shape, Square, key="sq")


                @registry.register_prototype(Shape, key="tri")
                class Triangle(Shape): ...

        """
        return self._register_or_decorate(
            contract=contract,
            producer=producer,
            lifetime=Lifetime.PROTOTYPE,
            key=key,
        )

    @overload
    def register_singleton(
        self,
        contract: UserContract,
        producer: None = None,
        *,
        key: str | None = None,
    ) -> Callable[[P], P]: ...

    @overload
    def register_singleton(
        self,
        contract: UserContract,
        producer: Producer[Any],
        *,
        key: str | None = None,
    ) -> None: ...

    def register_singleton(
        self,
        contract: UserContract,
        producer: Producer[Any] | None = None,
        *,
        key: str | None = None,
    ) -> Callable[[P], P] | None:
        """Register ``producer`` so the first resolution builds the only instance.

        Supports direct calls and decorator form (omit ``producer``).

        Examples:
            .. code-block:: python

                registry.register_singleton(Shape, Circle)


                @registry.register_singleton(Clock)
                def system_clock() -> Clock:
                    return SystemClock(tz="UTC")

        """
        return self._register_or_decorate(
            contract=contract,
            producer=producer,
            lifetime=Lifetime.SINGLETON,
            key=key,
        )

    def _register_or_decorate(
        self,
        *,
        contract: UserContract,
        producer: Producer[Any] | None,
        lifetime: Lifetime,
        key: str | None,
    ) -> Callable[[P], P] | None:
        if producer is not None:
            self.register(contract, producer, lifetime=lifetime, key=key)
            return None

        def decorator(decorated: P) -> P:
            self.register(contract, decorated, lifetime=lifetime, key=key)
            return decorated

        return decorator

    # endregion Registration

    # region Resolution

    @overload
    def resolve(self, contract: type[T], *, key: str | None = None) -> T | None: ...

    @overload
    def resolve(self, contract: Any, *, key: str | None = None) -> Any | None: ...

    def resolve(self, contract: Any, *, key: str | None = None) -> Any | None:
        """Return an instance for the ``(contract, key)`` slot.

        Args:
            contract: Registered contract, or a component-qualified
                ``Annotated`` contract.
            key: Disambiguator used at registration. Unknown keys are never
                interned and map to the default slot.

        Returns:
            The shared instance for singleton entries, a new instance for
            prototype entries, or ``None`` when nothing is registered.

        Raises:
            SlotWireInvalidKeyError: If ``key`` is not a string.

        Notes:
            Producer exceptions propagate unchanged. A failed singleton build
            caches nothing, so the next call tries again.

        Examples:
            .. code-block:: python

                circle = registry.resolve(Shape)
                square = registry.resolve(Shape, key="sq")

        """
        contract, key = self._normalize_contract_key(contract=contract, key=key)

        with self._lock:
            entry = self._find_entry(contract, key)
            if entry is None:
                return None

            if entry.lifetime is Lifetime.SINGLETON and not entry.is_cached:
                instance = entry.produce()
                logger.debug("Created singleton %s for %r", _describe(instance), entry.identity)
                return instance

            return entry.produce()

    # endregion Resolution

    # region Introspection

    @property
    def keys(self) -> KeyRegistry:
        """Interned disambiguators of this registry."""
        return self._keys

    def get_entry(
        self,
        contract: UserContract,
        *,
        key: str | None = None,
    ) -> RegistrationEntry | None:
        """Return the entry bound to ``(contract, key)`` without interning ``key``."""
        contract, key = self._normalize_contract_key(contract=contract, key=key)
        with self._lock:
            return self._find_entry(contract, key)

    def is_registered(self, contract: UserContract, *, key: str | None = None) -> bool:
        """Return ``True`` when ``resolve(contract, key=key)`` would find an entry."""
        return self.get_entry(contract, key=key) is not None

    def entries(self) -> list[RegistrationEntry]:
        """Return all entries in registration order."""
        with self._lock:
            return self._registrations.values()

    def __len__(self) -> int:
        with self._lock:
            return len(self._registrations)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self)}, keys={len(self._keys)})"

    # endregion Introspection

    def _find_entry(self, contract: UserContract, key: str | None) -> RegistrationEntry | None:
        identity = DependencyIdentity.build(
            contract,
            key,
            keys=self._keys,
            allow_create=False,
        )
        return self._registrations.find(identity)

    def _normalize_contract_key(
        self,
        *,
        contract: UserContract,
        key: str | None,
    ) -> tuple[UserContract, str | None]:
        base_contract, component_key = split_component_contract(contract)
        if component_key is None:
            return contract, key
        if key is not None:
            msg = (
                f"Contract {contract!r} already carries Component({component_key!r}); "
                f"do not pass key={key!r} as well."
            )
            raise SlotWireInvalidRegistrationError(msg)
        return base_contract, component_key


def _describe(value: Any) -> str:
    return getattr(value, "__qualname__", type(value).__qualname__)
