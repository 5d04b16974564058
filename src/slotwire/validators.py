from __future__ import annotations

import inspect
import logging
import types
from typing import Any, TypeGuard

from slotwire.exceptions import SlotWireInvalidRegistrationError
from slotwire.providers import Lifetime

logger = logging.getLogger(__name__)


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations."""
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


class RegistrationValidator:
    """Validates registrations before anything is interned or stored."""

    def validate(self, *, contract: Any, producer: Any, lifetime: Any) -> None:
        """Validate a complete ``(contract, producer, lifetime)`` registration."""
        self.validate_contract(contract)
        self.validate_lifetime(lifetime)
        self.validate_producer(contract=contract, producer=producer)

    def validate_contract(self, contract: Any) -> None:
        if contract is None:
            msg = "Registration contract must not be None."
            raise SlotWireInvalidRegistrationError(msg)
        try:
            hash(contract)
        except TypeError as exc:
            msg = f"Registration contract must be hashable, got {contract!r}."
            raise SlotWireInvalidRegistrationError(msg) from exc

    def validate_lifetime(self, lifetime: Any) -> None:
        if not isinstance(lifetime, Lifetime):
            msg = f"Registration lifetime must be a Lifetime member, got {lifetime!r}."
            raise SlotWireInvalidRegistrationError(msg)

    def validate_producer(self, *, contract: Any, producer: Any) -> None:
        """Validate that ``producer`` can build instances of ``contract``.

        Producers must be callable without arguments. Classes must also be
        concrete and subclass a class contract. Factory results are not
        inspected.
        """
        if not callable(producer):
            msg = f"Producer must be a class or a zero-argument callable, got {producer!r}."
            raise SlotWireInvalidRegistrationError(msg)

        self.validate_zero_argument_producer(producer)

        if not is_runtime_class(producer):
            return

        if inspect.isabstract(producer):
            msg = f"Producer '{producer.__qualname__}' cannot be an abstract class."
            raise SlotWireInvalidRegistrationError(msg)

        if not is_runtime_class(contract):
            return

        try:
            is_subclass = issubclass(producer, contract)
        except TypeError:
            # Protocols with data members or without runtime_checkable reject issubclass().
            logger.debug(
                "Skipping subclass check of %s against protocol contract %s",
                producer.__qualname__,
                contract.__qualname__,
            )
            return

        if not is_subclass:
            msg = (
                f"Producer '{producer.__qualname__}' does not implement contract "
                f"'{contract.__qualname__}'."
            )
            raise SlotWireInvalidRegistrationError(msg)

    def validate_zero_argument_producer(self, producer: Any) -> None:
        """Reject producers that cannot be called without arguments."""
        try:
            signature = inspect.signature(producer)
        except (TypeError, ValueError):
            # Some builtins expose no signature; they are called as-is on resolve.
            logger.debug("Skipping signature check of producer %r", producer)
            return

        required = [
            parameter.name
            for parameter in signature.parameters.values()
            if parameter.default is inspect.Parameter.empty
            and parameter.kind
            not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        ]
        if required:
            name = getattr(producer, "__qualname__", repr(producer))
            msg = (
                f"Producer '{name}' must be callable without arguments, "
                f"but requires {', '.join(required)}."
            )
            raise SlotWireInvalidRegistrationError(msg)
