"""Process-wide registry with ``registry_context``.

The context creates its registry lazily on first access. ``set_current``
binds an explicitly built registry at startup and ``reset`` tears the binding
down so the next access starts from an empty registry.
"""

from __future__ import annotations

from slotwire import Registry, registry_context


class Clock:
    def now(self) -> str:
        return "12:00"


def main() -> None:
    registry_context.register_singleton(Clock, Clock)
    clock = registry_context.resolve(Clock)
    print(f"lazy_bound={registry_context.is_bound}")  # => lazy_bound=True
    print(f"same_clock={clock is registry_context.resolve(Clock)}")  # => same_clock=True

    isolated = Registry()
    print(f"isolated_sees={isolated.resolve(Clock)}")  # => isolated_sees=None

    registry_context.reset()
    print(f"after_reset={registry_context.resolve(Clock)}")  # => after_reset=None

    registry_context.set_current(isolated)
    isolated.register_singleton(Clock, Clock)
    print(f"explicit_now={registry_context.resolve(Clock).now()}")  # => explicit_now=12:00

    registry_context.reset()
    print(f"after_teardown={registry_context.is_bound}")  # => after_teardown=False


if __name__ == "__main__":
    main()
