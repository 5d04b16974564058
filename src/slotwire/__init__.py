from slotwire.exceptions import (
    SlotWireError,
    SlotWireInvalidKeyError,
    SlotWireInvalidRegistrationError,
)
from slotwire.identity import DependencyIdentity
from slotwire.keys import KeyRegistry
from slotwire.markers import Component
from slotwire.providers import Lifetime, RegistrationEntry
from slotwire.registry import Registry
from slotwire.registry_context import RegistryContext, registry_context

__all__ = [
    "Component",
    "DependencyIdentity",
    "KeyRegistry",
    "Lifetime",
    "RegistrationEntry",
    "Registry",
    "RegistryContext",
    "SlotWireError",
    "SlotWireInvalidKeyError",
    "SlotWireInvalidRegistrationError",
    "registry_context",
]
