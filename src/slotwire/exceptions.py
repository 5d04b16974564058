class SlotWireError(Exception):
    """Represent a base class for all slotwire-specific failures.

    Catch this type when you want to handle any slotwire error path without
    matching each concrete exception class individually.
    """


class SlotWireInvalidRegistrationError(SlotWireError):
    """Signal invalid registration configuration.

    Raised by ``Registry.register``, ``Registry.register_prototype`` and
    ``Registry.register_singleton`` when the contract, producer or lifetime
    cannot be bound. Nothing is stored and no key is interned when this error
    is raised.

    Typical fixes include passing a concrete (non-abstract) producer class that
    subclasses the contract, passing a zero-argument factory callable, or
    using a hashable contract.
    """


class SlotWireInvalidKeyError(SlotWireError):
    """Signal a disambiguator key that is neither ``str`` nor ``None``.

    Raised by registration and by ``Registry.resolve``. Keys are interned by
    string value, so use a plain string (``key="replica"``) or omit the key to
    address the default slot.
    """
