"""Errors: what raises, and what quietly returns ``None``.

Invalid registrations raise ``SlotWireInvalidRegistrationError``. Missing slots
resolve to ``None``. Producer failures propagate unchanged and a failed
singleton build is retried on the next resolve.
"""

from __future__ import annotations

from slotwire import Registry, SlotWireInvalidRegistrationError


class Shape:
    pass


class Circle(Shape):
    pass


class NotAShape:
    pass


class FlakyService:
    attempts = 0

    def __init__(self) -> None:
        FlakyService.attempts += 1
        if FlakyService.attempts == 1:
            msg = "warming up"
            raise RuntimeError(msg)


def main() -> None:
    registry = Registry()

    try:
        registry.register_singleton(Shape, NotAShape)
    except SlotWireInvalidRegistrationError as error:
        print(f"invalid={type(error).__name__}")  # => invalid=SlotWireInvalidRegistrationError

    print(f"missing={registry.resolve(Shape)}")  # => missing=None

    registry.register_singleton(FlakyService, FlakyService)
    try:
        registry.resolve(FlakyService)
    except RuntimeError as error:
        print(f"first_attempt={error}")  # => first_attempt=warming up

    service = registry.resolve(FlakyService)
    print(f"retried={service is registry.resolve(FlakyService)}")  # => retried=True
    print(f"attempts={FlakyService.attempts}")  # => attempts=2


if __name__ == "__main__":
    main()
