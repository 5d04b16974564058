"""Lifetimes and keys: ``PROTOTYPE``, ``SINGLETON`` and keyed slots.

See how object identity changes across repeated resolves, how keys split one
contract into independent slots, and that the first registration of a slot
wins.
"""

from __future__ import annotations

from slotwire import Lifetime, Registry


class Shape:
    sides = 0


class Circle(Shape):
    pass


class Square(Shape):
    sides = 4


class Triangle(Shape):
    sides = 3


def main() -> None:
    registry = Registry()
    registry.register(Shape, Circle, lifetime=Lifetime.SINGLETON)
    registry.register(Shape, Square, lifetime=Lifetime.PROTOTYPE, key="sq")

    print(f"singleton_same={registry.resolve(Shape) is registry.resolve(Shape)}")  # => singleton_same=True

    first_square = registry.resolve(Shape, key="sq")
    second_square = registry.resolve(Shape, key="sq")
    print(f"prototype_new={first_square is not second_square}")  # => prototype_new=True

    registry.register_prototype(Shape, Triangle, key="sq")
    print(f"first_wins={type(registry.resolve(Shape, key='sq')).__name__}")  # => first_wins=Square

    print(f"missing={registry.resolve(Triangle)}")  # => missing=None
    print(f"interned={registry.keys.pairs()}")  # => interned=(('sq', 1),)


if __name__ == "__main__":
    main()
